"""
Soroban contract invocation operations
"""

from typing import List, Sequence, Union

from stellar_sdk import Address, InvokeHostFunction, scval
from stellar_sdk import xdr as stellar_xdr


def to_i128(amount: Union[str, int]) -> stellar_xdr.SCVal:
    """Integer amount (smallest units) as an i128 ScVal"""
    return scval.to_int128(int(amount))


def to_address(address: str) -> stellar_xdr.SCVal:
    """Account (G...) or contract (C...) address as an ScVal"""
    return scval.to_address(address)


def to_address_vec(addresses: Sequence[str]) -> stellar_xdr.SCVal:
    return scval.to_vec([scval.to_address(a) for a in addresses])


def invoke_contract_op(
    contract_id: str,
    function_name: str,
    parameters: List[stellar_xdr.SCVal],
) -> InvokeHostFunction:
    """
    Build an InvokeHostFunction operation calling contract_id.function_name

    Auth entries are left empty; Soroban simulation fills them in during
    prepare_transaction.
    """
    host_function = stellar_xdr.HostFunction(
        stellar_xdr.HostFunctionType.HOST_FUNCTION_TYPE_INVOKE_CONTRACT,
        invoke_contract=stellar_xdr.InvokeContractArgs(
            contract_address=Address(contract_id).to_xdr_sc_address(),
            function_name=stellar_xdr.SCSymbol(sc_symbol=function_name.encode("utf-8")),
            args=list(parameters),
        ),
    )
    return InvokeHostFunction(host_function=host_function, auth=[])


def mint_op(contract_id: str, destination: str, amount: Union[str, int]) -> InvokeHostFunction:
    """Token contract mint(to, amount)"""
    return invoke_contract_op(
        contract_id,
        "mint",
        [to_address(destination), to_i128(amount)],
    )
