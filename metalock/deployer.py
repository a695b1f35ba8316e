from pathlib import Path
from typing import Any, Optional

import click
from ape import networks
from ape.api import AccountAPI, ProviderAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts import ContractContainer, ContractInstance
from ape.exceptions import ApeException, ContractLogicError, TransactionError
from ape_accounts import KeyfileAccount
from eth_utils import to_checksum_address

from metalock.confirm import _confirm_arguments
from metalock.errors import ConfirmationError, SubmissionError
from metalock.interfaces import ContractDeployer, ContractFactory, DeploymentHandle
from metalock.networks import get_required_confirmations
from metalock.params import _validate_constructor_abi_inputs
from metalock.registry import registry_entry_from_deployment, write_registry
from metalock.utils import get_contract_container, verify_contracts


class ApeDeployment(DeploymentHandle):
    """A contract creation submitted through an ape account."""

    def __init__(
        self,
        instance: ContractInstance,
        provider: ProviderAPI,
        required_confirmations: int,
    ):
        self.instance = instance
        self.provider = provider
        self.required_confirmations = required_confirmations
        self.receipt: Optional[ReceiptAPI] = None

    @property
    def contract_name(self) -> str:
        return self.instance.contract_type.name

    @property
    def confirmed(self) -> bool:
        return self.receipt is not None

    def wait_for_deployment(self) -> None:
        txn_hash = self.instance.txn_hash
        if not txn_hash:
            raise ConfirmationError(f"No deployment transaction known for {self.contract_name}.")

        click.echo(
            f"Waiting for {self.required_confirmations} confirmation(s) "
            f"of {self.contract_name} deployment {txn_hash}...",
            err=True,
        )
        try:
            receipt = self.provider.get_receipt(
                txn_hash, required_confirmations=self.required_confirmations
            )
        except ApeException as e:
            raise ConfirmationError(
                f"Could not confirm {self.contract_name} deployment {txn_hash}: {e}"
            ) from e

        if receipt.failed:
            raise ConfirmationError(
                f"{self.contract_name} deployment transaction {txn_hash} reverted."
            )
        self.receipt = receipt

    def get_address(self) -> str:
        if not self.confirmed:
            raise ConfirmationError(f"{self.contract_name} deployment is not confirmed yet.")
        return to_checksum_address(self.instance.address)


class ApeContractFactory(ContractFactory):
    """Deploys one compiled contract from an ape account."""

    def __init__(
        self,
        container: ContractContainer,
        account: AccountAPI,
        provider: ProviderAPI,
        required_confirmations: int,
        autosign: bool = False,
    ):
        self.container = container
        self.account = account
        self.provider = provider
        self.required_confirmations = required_confirmations
        self.autosign = autosign

    @property
    def contract_name(self) -> str:
        return self.container.contract_type.name

    def deploy(self, *constructor_args: Any) -> ApeDeployment:
        _validate_constructor_abi_inputs(
            contract_name=self.contract_name,
            abi_inputs=self.container.constructor.abi.inputs,
            constructor_args=constructor_args,
        )
        if not self.autosign:
            _confirm_arguments(self.contract_name, constructor_args)

        try:
            # confirmations are awaited separately by the deployment handle
            instance = self.account.deploy(
                self.container,
                *constructor_args,
                required_confirmations=0,
            )
        except ContractLogicError as e:
            raise ConfirmationError(f"{self.contract_name} deployment reverted: {e}") from e
        except TransactionError as e:
            if isinstance(getattr(e, "txn", None), ReceiptAPI):
                # mined, then failed
                raise ConfirmationError(f"{self.contract_name} deployment failed: {e}") from e
            raise SubmissionError(f"{self.contract_name} deployment was rejected: {e}") from e
        except ApeException as e:
            raise SubmissionError(f"{self.contract_name} deployment was rejected: {e}") from e

        return ApeDeployment(
            instance=instance,
            provider=self.provider,
            required_confirmations=self.required_confirmations,
        )


class ApeContractDeployer(ContractDeployer):
    """
    Represents an ape account on the connected network, able to deploy
    project contracts and record the results.
    """

    def __init__(
        self,
        account: Optional[AccountAPI] = None,
        autosign: bool = False,
        provider: Optional[ProviderAPI] = None,
        required_confirmations: Optional[int] = None,
    ):
        if account is None:
            account = select_account()
        self.account = account
        self.provider = provider or networks.provider
        if required_confirmations is None:
            required_confirmations = get_required_confirmations(self.provider)
        self.required_confirmations = required_confirmations

        if autosign:
            click.secho(
                "WARNING: Autosign is enabled. Transactions will be signed automatically.",
                fg="yellow",
                err=True,
            )
        self.autosign = autosign
        if isinstance(self.account, KeyfileAccount):
            # test and plugin accounts have no keystore to unlock
            self.account.set_autosign(autosign)

    @property
    def address(self) -> str:
        return self.account.address

    def get_contract_factory(self, name: str) -> ApeContractFactory:
        container = get_contract_container(name)
        return ApeContractFactory(
            container=container,
            account=self.account,
            provider=self.provider,
            required_confirmations=self.required_confirmations,
            autosign=self.autosign,
        )

    def finalize(
        self,
        deployment: ApeDeployment,
        registry_filepath: Optional[Path] = None,
        verify: bool = False,
    ) -> None:
        """
        Publishes the deployment to the registry and optionally to the block explorer.
        """
        if registry_filepath:
            entry = registry_entry_from_deployment(
                contract_instance=deployment.instance, receipt=deployment.receipt
            )
            output_filepath = write_registry(entries=[entry], filepath=registry_filepath)
            click.echo(f"(i) Registry written to {output_filepath}!", err=True)
        if verify:
            verify_contracts(contracts=[deployment.instance])

    def print_deployment_info(self) -> None:
        network = self.provider.network
        click.echo(
            "\n".join(
                (
                    f"Account: {self.address}",
                    f"Ecosystem: {network.ecosystem.name}",
                    f"Network: {network.name}",
                    f"Chain ID: {self.provider.chain_id}",
                    f"Gas Price: {self.provider.gas_price}",
                    f"Required Confirmations: {self.required_confirmations}",
                )
            ),
            err=True,
        )
