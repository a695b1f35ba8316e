import json
import re

import pytest

from tests.conftest import MOCK_ADDRESS, FakeDeployer, FakeFactory
from metalock.constants import CONTRACT_NAME, EXIT_FAILURE, EXIT_SUCCESS
from metalock.errors import (
    ArtifactNotFoundError,
    ConfirmationError,
    DeploymentError,
    SubmissionError,
)
from metalock.runner import execute, main, run

ADDRESS_LINE = re.compile(r"^MetaLock DAO deployed to: 0x[0-9a-fA-F]{40}$")


def test_successful_deployment_prints_address(deployer, capsys):
    exit_code = main(deployer)

    captured = capsys.readouterr()
    assert EXIT_SUCCESS == exit_code
    assert f"MetaLock DAO deployed to: {MOCK_ADDRESS}\n" == captured.out
    assert "" == captured.err


def test_printed_address_has_chain_address_format(capsys):
    deployer = FakeDeployer({CONTRACT_NAME: FakeFactory()})

    assert EXIT_SUCCESS == main(deployer)

    lines = capsys.readouterr().out.splitlines()
    assert 1 == len(lines)
    assert ADDRESS_LINE.match(lines[0])


def test_each_run_is_a_new_deployment(capsys):
    factory = FakeFactory()
    deployer = FakeDeployer({CONTRACT_NAME: factory})

    assert EXIT_SUCCESS == main(deployer)
    assert EXIT_SUCCESS == main(deployer)

    lines = capsys.readouterr().out.splitlines()
    assert 2 == len(factory.calls)
    assert 2 == len(lines)
    assert lines[0] != lines[1]


def test_run_deploys_the_metalock_dao_by_default(deployer, factory):
    deployment = run(deployer)

    assert [()] == factory.calls
    assert factory.deployments == [deployment]
    assert deployment.confirmed


def test_run_forwards_constructor_args(deployer, factory):
    run(deployer, constructor_args=["0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed", 7])
    assert [("0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed", 7)] == factory.calls


def test_run_propagates_errors(deployer):
    with pytest.raises(ArtifactNotFoundError):
        run(deployer, contract_name="NotAContract")


def test_unknown_artifact_exits_nonzero(deployer, capsys):
    exit_code = main(deployer, contract_name="NotAContract")

    captured = capsys.readouterr()
    assert EXIT_FAILURE == exit_code
    assert "" == captured.out
    assert "ArtifactNotFoundError" in captured.err
    assert "NotAContract" in captured.err


def test_rejected_submission_exits_nonzero(capsys):
    error = SubmissionError("insufficient funds for gas * price + value")
    deployer = FakeDeployer({CONTRACT_NAME: FakeFactory(submission_error=error)})

    exit_code = main(deployer)

    captured = capsys.readouterr()
    assert EXIT_FAILURE == exit_code
    assert "" == captured.out
    assert str(error) in captured.err
    assert "Traceback (most recent call last)" in captured.err


def test_reverted_deployment_exits_nonzero(capsys):
    error = ConfirmationError("MetaLockDAO deployment transaction 0x01 reverted.")
    factory = FakeFactory(address=MOCK_ADDRESS, confirmation_error=error)
    deployer = FakeDeployer({CONTRACT_NAME: factory})

    exit_code = main(deployer)

    captured = capsys.readouterr()
    assert EXIT_FAILURE == exit_code
    assert MOCK_ADDRESS not in captured.out
    assert "" == captured.out
    assert "reverted" in captured.err


def test_unexpected_client_errors_exit_nonzero(capsys):
    factory = FakeFactory(submission_error=ConnectionError("node down"))
    deployer = FakeDeployer({CONTRACT_NAME: factory})

    assert EXIT_FAILURE == main(deployer)

    captured = capsys.readouterr()
    assert "" == captured.out
    assert "ConnectionError: node down" in captured.err


def test_finalize_receives_confirmed_deployment(deployer, factory):
    finalized = list()

    assert EXIT_SUCCESS == main(deployer, finalize=finalized.append)
    assert factory.deployments == finalized


def test_finalize_is_skipped_on_failure():
    finalized = list()
    factory = FakeFactory(submission_error=SubmissionError("rejected"))
    deployer = FakeDeployer({CONTRACT_NAME: factory})

    assert EXIT_FAILURE == main(deployer, finalize=finalized.append)
    assert [] == finalized


def test_finalize_failure_exits_nonzero(deployer, capsys):
    def finalize(deployment):
        raise DeploymentError("registry is not writable")

    assert EXIT_FAILURE == main(deployer, finalize=finalize)

    captured = capsys.readouterr()
    assert f"MetaLock DAO deployed to: {MOCK_ADDRESS}\n" == captured.out
    assert "registry is not writable" in captured.err


def test_execute_success(capsys):
    assert EXIT_SUCCESS == execute(lambda: None)
    assert "" == capsys.readouterr().err


def test_execute_maps_setup_errors_to_nonzero(capsys):
    def setup():
        json.loads("{not json")

    assert EXIT_FAILURE == execute(setup)

    captured = capsys.readouterr()
    assert "" == captured.out
    assert "JSONDecodeError" in captured.err
