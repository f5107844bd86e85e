"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path

os.environ.setdefault("DB_URI", "sqlite://")
os.environ.setdefault("WEB3_PROVIDER", "http://localhost:8545")

# 项目根目录加入 PYTHONPATH（扁平布局）
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from app import create_app
from extensions import db
from utils.chain_reader import format_units, NATIVE_DECIMALS
from utils.errors import ChainReaderError
from utils.wallet_service import WalletService
from utils.wallet_store import WalletStore

WALLET_A = "0x" + "a" * 40
WALLET_B = "0x" + "b" * 40
WALLET_C = "0x" + "c" * 40
TOKEN = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
TX_1 = "0x" + "1" * 64
TX_2 = "0x" + "2" * 64


class FakeChainReader:
    """In-memory stand-in for ChainReader keyed by lowercase address."""

    def __init__(self, token_decimals=6):
        self.token_decimals = token_decimals
        self.native = {}
        self.token = {}
        self.failing = set()
        self.calls = []

    def get_balances(self, address):
        address = address.lower()
        self.calls.append(address)
        if address in self.failing:
            raise ChainReaderError(f"node unreachable for {address}")
        return {
            "native": format_units(self.native.get(address, 0), NATIVE_DECIMALS),
            "token": format_units(self.token.get(address, 0), self.token_decimals),
        }


@pytest.fixture
def chain_reader():
    return FakeChainReader()


@pytest.fixture
def app(chain_reader):
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
        },
        chain_reader=chain_reader,
    )
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return WalletStore(db.session)


@pytest.fixture
def service(store, chain_reader):
    return WalletService(store, chain_reader)
