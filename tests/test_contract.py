import unittest
from types import SimpleNamespace

from aiohttp import ClientConnectionError
from web3.exceptions import BadFunctionCallOutput, ContractLogicError, Web3RPCError

from fakes import ALICE

from ledger.abi import CONTRACT_ABI, DEFAULT_CONTRACT_ADDRESS
from ledger.contract import Web3RegistryContract, rpc_error_code, translate_errors
from ledger.errors import (
    FetchError,
    NetworkError,
    NotFound,
    RejectedByUser,
    Reverted,
)

RECORD = (
    7,
    "Tomatoes",
    "Vegetable",
    "2025-06-01",
    "07:30",
    "Green Valley",
    "A",
    15 * 10**17,
    "Vine ripened",
    ALICE,
    True,
    1_748_000_000,
)
EMPTY_RECORD = (0, "", "", "", "", "", "", 0, "", "0x0000000000000000000000000000000000000000", False, 0)


def _call(result=None, error=None):
    async def call():
        if error is not None:
            raise error
        return result

    return SimpleNamespace(call=call)


def make_binding(functions, receipt=None):
    """Web3RegistryContract over stubbed web3 objects, no network involved."""

    async def wait_for_transaction_receipt(tx_hash, timeout=None, poll_latency=0.1):
        return receipt

    eth = SimpleNamespace(
        contract=lambda address, abi: SimpleNamespace(functions=functions),
        wait_for_transaction_receipt=wait_for_transaction_receipt,
    )
    return Web3RegistryContract(SimpleNamespace(eth=eth), DEFAULT_CONTRACT_ADDRESS, ALICE)


class TranslateErrorsTestCase(unittest.TestCase):
    def _raise(self, error, on_revert=Reverted, fallback=Reverted):
        with translate_errors("test", on_revert, fallback):
            raise error

    def test_rpc_error_code(self):
        err = Web3RPCError("denied", rpc_response={"jsonrpc": "2.0", "id": 1, "error": {"code": 4001, "message": "denied"}})
        self.assertEqual(rpc_error_code(err), 4001)
        self.assertEqual(rpc_error_code(ValueError({"code": -32000, "message": "x"})), -32000)
        self.assertIsNone(rpc_error_code(ValueError("plain")))

    def test_user_rejection(self):
        err = Web3RPCError("denied", rpc_response={"jsonrpc": "2.0", "id": 1, "error": {"code": 4001, "message": "denied"}})
        with self.assertRaises(RejectedByUser):
            self._raise(err)

    def test_revert(self):
        with self.assertRaises(Reverted):
            self._raise(ContractLogicError("execution reverted: name required"))
        with self.assertRaises(NotFound):
            self._raise(ContractLogicError("execution reverted"), on_revert=NotFound)

    def test_rpc_revert_message(self):
        err = Web3RPCError("VM Exception while processing transaction: revert", rpc_response={"jsonrpc": "2.0", "id": 1, "error": {"code": -32603, "message": "revert"}})
        with self.assertRaises(Reverted):
            self._raise(err)

    def test_other_rpc_error_is_network(self):
        err = Web3RPCError("header not found", rpc_response={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "header not found"}})
        with self.assertRaises(NetworkError):
            self._raise(err)

    def test_transport_failures(self):
        for err in (ClientConnectionError("refused"), ConnectionResetError(), TimeoutError()):
            with self.subTest(err=type(err).__name__):
                with self.assertRaises(NetworkError):
                    self._raise(err)

    def test_bad_output_uses_fallback(self):
        with self.assertRaises(FetchError):
            self._raise(BadFunctionCallOutput("no code"), fallback=FetchError)

    def test_unrelated_errors_propagate(self):
        with self.assertRaises(KeyError):
            self._raise(KeyError("bug"))


class Web3RegistryContractTestCase(unittest.IsolatedAsyncioTestCase):
    def test_abi_declares_the_contract_functions(self):
        names = {entry["name"] for entry in CONTRACT_ABI}
        self.assertEqual(names, {"registerProduct", "getProduct", "getAllProducts", "products"})

    async def test_get_product_decodes_record(self):
        binding = make_binding(SimpleNamespace(getProduct=lambda pid: _call(RECORD)))
        product = await binding.get_product(7)

        self.assertEqual(product.id, 7)
        self.assertEqual(product.price_per_unit, 15 * 10**17)
        self.assertEqual(product.price_display, "1.5")
        self.assertTrue(product.is_available)
        self.assertEqual(product.farmer, ALICE)

    async def test_get_product_missing(self):
        binding = make_binding(SimpleNamespace(getProduct=lambda pid: _call(EMPTY_RECORD)))
        with self.assertRaises(NotFound):
            await binding.get_product(3)

        binding = make_binding(
            SimpleNamespace(getProduct=lambda pid: _call(error=ContractLogicError("execution reverted: Product does not exist")))
        )
        with self.assertRaises(NotFound):
            await binding.get_product(3)

    async def test_get_all_products_keeps_order(self):
        second = (2,) + RECORD[1:]
        binding = make_binding(SimpleNamespace(getAllProducts=lambda: _call([RECORD, second])))
        products = await binding.get_all_products()
        self.assertEqual([p.id for p in products], [7, 2])

    async def test_register_product_returns_hex_hash(self):
        sent = {}

        def register(*args):
            async def transact(tx):
                sent["args"] = args
                sent["tx"] = tx
                return b"\x11" * 32

            return SimpleNamespace(transact=transact)

        binding = make_binding(SimpleNamespace(registerProduct=register))
        tx_hash = await binding.register_product("a", "b", "c", "d", "e", "f", 5, "g")

        self.assertEqual(tx_hash, "0x" + "11" * 32)
        self.assertEqual(sent["args"], ("a", "b", "c", "d", "e", "f", 5, "g"))
        self.assertEqual(sent["tx"], {"from": ALICE})

    async def test_receipt_status(self):
        ok = {"transactionHash": b"\x22" * 32, "blockNumber": 12, "gasUsed": 90_000, "status": 1}
        receipt = await make_binding(SimpleNamespace(), receipt=ok).wait_for_receipt("0x" + "22" * 32)
        self.assertEqual(receipt.block_number, 12)
        self.assertEqual(receipt.tx_hash, "0x" + "22" * 32)

        failed = dict(ok, status=0)
        with self.assertRaises(Reverted):
            await make_binding(SimpleNamespace(), receipt=failed).wait_for_receipt("0x" + "22" * 32)
