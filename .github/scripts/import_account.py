#!/usr/bin/env python3

from metalock.accounts import import_deployer_account


def main():
    account = import_deployer_account()
    print(f"Account imported: {account.address}")


if __name__ == '__main__':
    main()
