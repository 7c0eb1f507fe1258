import typing

from behave import then, use_step_matcher, when

from klaytn_sdk import utils
from klaytn_sdk.keyring import Keyring

# Use regular expressions
use_step_matcher("re")


@when(r"I create a keyring from the private key")
def when_create_keyring(context: typing.Any):
    context.keyring = Keyring.create_from_private_key(context.input)


@when(r"I create a keyring for address (?P<address>0x[0-9a-fA-F]{40}) from the private key")
def when_create_decoupled_keyring(context: typing.Any, address: str):
    context.keyring = Keyring.create_with_single_key(address, context.input)


@when(r"I export the klaytn wallet key")
def when_export_wallet_key(context: typing.Any):
    try:
        context.output = context.keyring.get_klaytn_wallet_key()
    except Exception as e:
        context.output = e


@when(r"I parse the klaytn wallet key")
def when_parse_wallet_key(context: typing.Any):
    try:
        _, _, context.output = utils.parse_klaytn_wallet_key(context.input)
    except Exception as e:
        context.output = e


@then(r"I should fail to parse the klaytn wallet key")
def then_fail_parse_wallet_key(context: typing.Any):
    assert isinstance(context.output, Exception)
