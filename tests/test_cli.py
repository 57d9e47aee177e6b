"""Tests for configuration loading and the create command."""

import textwrap
import uuid

import pytest
from solders.keypair import Keypair

from pump_launch import cli
from pump_launch.core.pubkeys import DEVNET_ADDRESSES, MAINNET_ADDRESSES, get_active_addresses
from tests.conftest import FakeSolanaClient


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for var in ("SOLANA_NODE_RPC_ENDPOINT", "SOLANA_PRIVATE_KEY", *cli.OPTIONAL_DEFAULTS):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config_module(tmp_path, monkeypatch: pytest.MonkeyPatch, clean_env):
    """Writes a uniquely named config module into a temp dir on sys.path and returns its import name."""

    def _write(body: str) -> str:
        name = f"launch_cfg_{uuid.uuid4().hex}"
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(body))
        return name

    monkeypatch.syspath_prepend(str(tmp_path))
    return _write


# ── load_config ──────────────────────────────────────────────────────


class TestLoadConfig:
    def test_defaults(self, config_module) -> None:
        name = config_module(f"""
            SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"
            SOLANA_PRIVATE_KEY = "{Keypair()}"
        """)
        cfg = cli.load_config(name)
        assert cfg["SOLANA_NETWORK"] == "mainnet"
        assert cfg["BUY_SLIPPAGE_PERCENT"] == 10.0
        assert cfg["CONFIRM_COMMITMENT"] == "finalized"

    def test_env_fallback_and_coercion(self, config_module, monkeypatch) -> None:
        name = config_module('SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"\n')
        monkeypatch.setenv("SOLANA_PRIVATE_KEY", str(Keypair()))
        monkeypatch.setenv("SKIP_PREFLIGHT", "true")
        monkeypatch.setenv("COMPUTE_UNIT_LIMIT", "300000")
        cfg = cli.load_config(name)
        assert cfg["SKIP_PREFLIGHT"] is True
        assert cfg["COMPUTE_UNIT_LIMIT"] == 300_000

    def test_invalid_value_uses_default(self, config_module, monkeypatch) -> None:
        name = config_module(f"""
            SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"
            SOLANA_PRIVATE_KEY = "{Keypair()}"
            CONFIRM_TIMEOUT_SECONDS = "soon"
        """)
        assert cli.load_config(name)["CONFIRM_TIMEOUT_SECONDS"] == 90

    def test_missing_private_key(self, config_module) -> None:
        name = config_module('SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"\n')
        with pytest.raises(ValueError, match="SOLANA_PRIVATE_KEY"):
            cli.load_config(name)

    def test_unknown_network(self, config_module) -> None:
        name = config_module(f"""
            SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"
            SOLANA_PRIVATE_KEY = "{Keypair()}"
            SOLANA_NETWORK = "testnet"
        """)
        with pytest.raises(ValueError, match="Unknown Solana network"):
            cli.load_config(name)

    def test_bad_commitment(self, config_module) -> None:
        name = config_module(f"""
            SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"
            SOLANA_PRIVATE_KEY = "{Keypair()}"
            CONFIRM_COMMITMENT = "max"
        """)
        with pytest.raises(ValueError, match="CONFIRM_COMMITMENT"):
            cli.load_config(name)

    def test_each_module_loads_its_own_values(self, config_module) -> None:
        first = config_module(f"""
            SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"
            SOLANA_PRIVATE_KEY = "{Keypair()}"
        """)
        second = config_module(f"""
            SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"
            SOLANA_PRIVATE_KEY = "{Keypair()}"
            SOLANA_NETWORK = "devnet"
        """)
        assert first != second
        assert cli.load_config(first)["SOLANA_NETWORK"] == "mainnet"
        assert cli.load_config(second)["SOLANA_NETWORK"] == "devnet"

    def test_missing_module(self, clean_env) -> None:
        with pytest.raises(ModuleNotFoundError):
            cli.load_config("no_such_launch_config")


# ── create command ───────────────────────────────────────────────────


class TestCreateCommand:
    def test_parser(self) -> None:
        args = cli.build_parser().parse_args([
            "create", "--name", "Test Token", "--symbol", "TEST", "--uri", "ipfs://x",
            "--buy-amount", "0.5", "--devnet",
        ])
        assert args.command == "create"
        assert args.buy_amount == 0.5
        assert args.slippage is None
        assert args.devnet

    def test_parser_requires_name(self) -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["create", "--symbol", "TEST", "--uri", "ipfs://x"])

    async def test_main_creates_token(self, config_module, monkeypatch, capsys) -> None:
        fake_client = FakeSolanaClient()
        monkeypatch.setattr(cli, "SolanaClient", lambda *args, **kwargs: fake_client)
        mint = Keypair()
        name = config_module(f"""
            SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"
            SOLANA_PRIVATE_KEY = "{Keypair()}"
        """)

        code = await cli.main([
            "create", "--config", name, "--name", "Test Token", "--symbol", "TEST",
            "--uri", "ipfs://x", "--mint-key", str(mint),
        ])

        assert code == 0
        out = capsys.readouterr().out
        assert fake_client.call_names[0] == "get_balance_lamports"
        assert f"Mint: {mint.pubkey()}" in out
        assert f"Signature: {fake_client.sent[0].signatures[0]}" in out
        assert get_active_addresses() is MAINNET_ADDRESSES

    async def test_devnet_flag(self, config_module, monkeypatch) -> None:
        fake_client = FakeSolanaClient()
        monkeypatch.setattr(cli, "SolanaClient", lambda *args, **kwargs: fake_client)
        name = config_module(f"""
            SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"
            SOLANA_PRIVATE_KEY = "{Keypair()}"
        """)

        code = await cli.main([
            "create", "--config", name, "--name", "Test Token", "--symbol", "TEST",
            "--uri", "ipfs://x", "--devnet",
        ])

        assert code == 0
        assert get_active_addresses() is DEVNET_ADDRESSES

    async def test_launch_error_exit_code(self, config_module, monkeypatch) -> None:
        fake_client = FakeSolanaClient(fee_samples=[])
        monkeypatch.setattr(cli, "SolanaClient", lambda *args, **kwargs: fake_client)
        name = config_module(f"""
            SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"
            SOLANA_PRIVATE_KEY = "{Keypair()}"
        """)

        code = await cli.main([
            "create", "--config", name, "--name", "Test Token", "--symbol", "TEST", "--uri", "ipfs://x",
        ])

        assert code == 2
        assert fake_client.sent == []

    async def test_config_error_exit_code(self, config_module) -> None:
        name = config_module('SOLANA_NODE_RPC_ENDPOINT = "http://localhost:8899"\n')
        code = await cli.main([
            "create", "--config", name, "--name", "Test Token", "--symbol", "TEST", "--uri", "ipfs://x",
        ])
        assert code == 1
