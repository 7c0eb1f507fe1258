import typing

from behave import given, then, use_step_matcher, when

from klaytn_sdk.account_key import (
    AccountKeyDecoder,
    AccountKeyNil,
    AccountKeyPublic,
    AccountKeyRoleBased,
    AccountKeyWeightedMultiSig,
    WeightedMultiSigOptions,
)

# Use regular expressions
use_step_matcher("re")


@given(r"the account key nil")
def given_account_key_nil(context: typing.Any):
    context.account_key = AccountKeyNil()


@when(r"I build a public account key")
def when_build_public(context: typing.Any):
    context.account_key = AccountKeyPublic(context.input.public_key())


@when(
    r"I build a weighted multisig account key with threshold (?P<threshold>\d+) and weights \[(?P<weights>[\d,]*)]"
)
def when_build_weighted_multisig(context: typing.Any, threshold: str, weights: str):
    options = WeightedMultiSigOptions(int(threshold), [int(w) for w in weights.split(",")])
    context.account_key = AccountKeyWeightedMultiSig.from_public_keys_and_options(
        [key.public_key() for key in context.input], options
    )


@when(r"I build a role based account key with key counts \[(?P<counts>[\d,]*)]")
def when_build_role_based(context: typing.Any, counts: str):
    keys = iter(context.input)
    role_keys = [
        [next(keys).public_key() for _ in range(int(count))]
        for count in counts.split(",")
    ]
    options = WeightedMultiSigOptions.get_default_options_for_role_based(
        [len(role) for role in role_keys]
    )
    context.account_key = AccountKeyRoleBased.from_role_based_public_keys_and_options(
        role_keys, options
    )


@when(r"I encode the account key")
def when_encode(context: typing.Any):
    context.output = context.account_key.to_bytes()


@when(r"I decode the result")
def when_decode_result(context: typing.Any):
    context.decoded = AccountKeyDecoder.decode(context.output)


@when(r"I decode the input as an account key")
def when_decode_input(context: typing.Any):
    try:
        context.output = AccountKeyDecoder.decode(context.input)
    except Exception as e:
        context.output = e


@when(r"I count the keys of each role")
def when_count_role_keys(context: typing.Any):
    counts = []
    for key in context.decoded.account_keys:
        if isinstance(key, AccountKeyNil):
            counts.append(0)
        elif isinstance(key, AccountKeyPublic):
            counts.append(1)
        else:
            counts.append(len(key.weighted_public_keys))
    context.output = counts


@then(r"the result should start with tag (?P<tag>0x[0-9a-f]{2})")
def then_starts_with_tag(context: typing.Any, tag: str):
    assert context.output[0] == int(tag, 16), (
        "Expected tag " + tag + " but got " + hex(context.output[0])
    )


@then(r"the decoded account key should equal the account key")
def then_decoded_equals(context: typing.Any):
    assert context.decoded == context.account_key, (
        "Expected " + repr(context.account_key) + " but got " + repr(context.decoded)
    )


@then(r"I should fail to decode the account key")
def then_fail_decode(context: typing.Any):
    assert isinstance(context.output, Exception)
