import json
import os
from decimal import Decimal
from web3 import Web3
from utils.errors import ChainReaderError

BASE_DIR = os.path.dirname(os.path.abspath(__file__))  # 当前文件目录
ABIS_DIR = os.path.join(BASE_DIR, '..', 'abis')       # abis 目录

with open(os.path.join(ABIS_DIR, 'ERC20_ABI.json'), 'r') as f:
    ERC20_ABI = json.load(f)

NATIVE_DECIMALS = 18


def format_units(value: int, decimals: int) -> str:
    """
    把链上最小单位的整数格式化为十进制字符串（与 ethers.formatUnits 一致）：
    0 -> "0.0"，1500000 (6位) -> "1.5"，100000000 (6位) -> "100.0"
    """
    value = int(value)
    sign = '-' if value < 0 else ''
    whole, fraction = divmod(abs(value), 10 ** decimals)
    fraction_str = str(fraction).rjust(decimals, '0').rstrip('0') if decimals else ''
    return f"{sign}{whole}.{fraction_str or '0'}"


class ChainReader:
    """只读链上查询：原生币余额和 ERC-20 balanceOf"""

    def __init__(self, w3: Web3, token_address: str, token_decimals: int = 6):
        self.w3 = w3
        self.token_address = Web3.to_checksum_address(token_address)
        self.token_decimals = token_decimals

    @classmethod
    def from_provider(cls, provider_url: str, token_address: str, token_decimals: int = 6):
        return cls(Web3(Web3.HTTPProvider(provider_url)), token_address, token_decimals)

    def get_native_balance(self, address: str) -> Decimal:
        wei = self.get_native_balance_wei(address)
        return Decimal(wei) / Decimal(10 ** NATIVE_DECIMALS)

    def get_native_balance_wei(self, address: str) -> int:
        try:
            return self.w3.eth.get_balance(Web3.to_checksum_address(address))
        except Exception as e:
            raise ChainReaderError(f"get_balance failed for {address}: {e}") from e

    def get_token_balance(self, token_address: str, owner_address: str) -> int:
        try:
            contract = self.w3.eth.contract(address=Web3.to_checksum_address(token_address), abi=ERC20_ABI)
            return contract.functions.balanceOf(Web3.to_checksum_address(owner_address)).call()
        except Exception as e:
            raise ChainReaderError(f"balanceOf failed for {owner_address}: {e}") from e

    def get_balances(self, address: str) -> dict:
        """返回格式化后的 {native, token} 余额"""
        native_wei = self.get_native_balance_wei(address)
        token_raw = self.get_token_balance(self.token_address, address)
        return {
            'native': format_units(native_wei, NATIVE_DECIMALS),
            'token': format_units(token_raw, self.token_decimals),
        }
