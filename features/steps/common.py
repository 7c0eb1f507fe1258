import typing

from behave import given, then, use_step_matcher

from klaytn_sdk.account_address import AccountAddress
from klaytn_sdk.secp256k1_ecdsa import PrivateKey

# Use regular expressions
use_step_matcher("re")


@given(
    r"(?P<input_type>private_key|wallet_key|address|bytes|string|u64) (?P<input_value>\S+)"
)
def given_input(context: typing.Any, input_type: str, input_value: str):
    context.input = parse_value(input_type, input_value)


@given(r"sequence of (?P<input_type>[a-z_0-9]+) \[(?P<input_value>.*)]")
def given_sequence_input(context: typing.Any, input_type: str, input_value: str):
    context.input = parse_sequence(input_type, input_value)


@then(r"the result should be (?P<expected_type>[a-z_0-9]+) (?P<expected_value>\S+)")
def then_result(context: typing.Any, expected_type: str, expected_value: str):
    expected_val = parse_value(expected_type, expected_value)
    assert context.output == expected_val, (
        "Expected " + str(expected_val) + " but got " + str(context.output)
    )


@then(
    r"the result should be sequence of (?P<expected_type>[a-z_0-9]+) \[(?P<expected_value>\S*)]"
)
def then_result_sequence(context: typing.Any, expected_type: str, expected_value: str):
    expected_val = parse_sequence(expected_type, expected_value)
    assert context.output == expected_val, (
        "Expected " + str(expected_val) + " but got " + str(context.output)
    )


def parse_value(input_type: str, input_value: str) -> typing.Any:
    if input_type == "private_key":
        return PrivateKey.from_hex(input_value)
    elif input_type == "u64":
        return int(input_value)
    elif input_type == "address":
        return str(AccountAddress.from_str(input_value))
    elif input_type == "bytes":
        return parse_hex(input_value)
    elif input_type == "string" or input_type == "wallet_key":
        return parse_string(input_value)
    else:
        raise Exception("Unrecognized input type")


def parse_sequence(input_type: str, input_value: str) -> typing.List[typing.Any]:
    # Skip early if there are no values
    if len(input_value) == 0:
        return []

    return [parse_value(input_type, val) for val in input_value.split(",")]


def parse_hex(input_value: str):
    if input_value.startswith("0x"):
        input_value = input_value[2:]
    return bytes.fromhex(input_value)


def parse_string(input_value: str):
    if input_value.startswith('"'):
        input_value = input_value[1:]
    if input_value.endswith('"'):
        input_value = input_value[:-1]
    return input_value
