# validators.py
import re
from decimal import Decimal, InvalidOperation

ADDRESS_RE = re.compile(r'^0x[a-fA-F0-9]{40}$')
TX_HASH_RE = re.compile(r'^0x[a-fA-F0-9]{64}$')


def is_valid_address(value) -> bool:
    return isinstance(value, str) and ADDRESS_RE.fullmatch(value) is not None


def is_valid_tx_hash(value) -> bool:
    return isinstance(value, str) and TX_HASH_RE.fullmatch(value) is not None


def is_valid_amount(value) -> bool:
    """
    金额只要求可解析为数字：不限上限、不限小数位，负数和 0 也放行。
    NaN / Infinity 不算数字。
    """
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        return Decimal(value.strip()).is_finite()
    except InvalidOperation:
        return False


def is_valid_referral_code(value) -> bool:
    return isinstance(value, str) and value != ''


def is_valid_address_list(value) -> bool:
    # 列表内每个地址在使用时再单独校验
    return isinstance(value, list) and len(value) > 0
