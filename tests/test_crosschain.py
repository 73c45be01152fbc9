import pytest

from bituncoin.crosschain import CrossChainBridge, CrossChainError

ALICE = "GLDalice00000000000000000000"
BOB = "GLDbob0000000000000000000000"


@pytest.fixture
def bridge():
    return CrossChainBridge()


def test_supported_chains_symbols(bridge):
    symbols = {c.symbol for c in bridge.get_supported_chains()}
    assert symbols == {"GLD", "BTC", "ETH", "BNB"}


def test_inactive_chain_not_listed(bridge):
    bridge.supported_chains["bitcoin"].active = False
    names = [c.name for c in bridge.get_supported_chains()]
    assert "Bitcoin" not in names
    assert len(names) == 3


def test_create_transaction(bridge):
    tx = bridge.create_cross_chain_transaction("goldcoin", "ethereum", ALICE, BOB, 100.0)
    assert tx.id.startswith("ccx_")
    assert tx.status == "pending"
    assert tx.confirmations == 0
    assert tx.fee == pytest.approx(1.0)
    assert bridge.get_transaction_status(tx.id) is tx


def test_transaction_ids_are_unique(bridge):
    ids = {
        bridge.create_cross_chain_transaction("goldcoin", "bitcoin", ALICE, BOB, 10.0).id
        for _ in range(20)
    }
    assert len(ids) == 20


def test_unsupported_source_chain(bridge):
    with pytest.raises(CrossChainError, match="source chain dogecoin not supported"):
        bridge.create_cross_chain_transaction("dogecoin", "bitcoin", ALICE, BOB, 10.0)


def test_unsupported_destination_chain(bridge):
    with pytest.raises(CrossChainError, match="destination chain dogecoin not supported"):
        bridge.create_cross_chain_transaction("bitcoin", "dogecoin", ALICE, BOB, 10.0)


@pytest.mark.parametrize("amount", [0, -5.0])
def test_non_positive_amount(bridge, amount):
    with pytest.raises(CrossChainError, match="amount must be greater than 0"):
        bridge.create_cross_chain_transaction("goldcoin", "bitcoin", ALICE, BOB, amount)


def test_missing_transaction(bridge):
    with pytest.raises(CrossChainError, match="transaction not found"):
        bridge.get_transaction_status("ccx_0")


def test_update_status(bridge):
    tx = bridge.create_cross_chain_transaction("goldcoin", "binance", ALICE, BOB, 50.0)
    bridge.update_transaction_status(tx.id, "completed")
    assert bridge.get_transaction_status(tx.id).status == "completed"


def test_update_missing_transaction(bridge):
    with pytest.raises(CrossChainError, match="transaction not found"):
        bridge.update_transaction_status("ccx_0", "completed")


def test_estimate_includes_network_fee(bridge):
    tx = bridge.create_cross_chain_transaction("goldcoin", "ethereum", ALICE, BOB, 250.0)
    estimate = bridge.estimate_cross_chain_fee("goldcoin", "ethereum", 250.0)
    assert estimate - tx.fee == pytest.approx(0.001)


def test_estimate_unsupported_chain(bridge):
    with pytest.raises(CrossChainError, match="not supported"):
        bridge.estimate_cross_chain_fee("goldcoin", "dogecoin", 1.0)


def test_swap_tokens_uses_same_address(bridge):
    tx_id = bridge.swap_tokens("bitcoin", "goldcoin", ALICE, 5.0)
    tx = bridge.get_transaction_status(tx_id)
    assert tx.from_address == ALICE
    assert tx.to_address == ALICE
    assert (tx.from_chain, tx.to_chain) == ("bitcoin", "goldcoin")


def test_swap_tokens_propagates_errors(bridge):
    with pytest.raises(CrossChainError):
        bridge.swap_tokens("bitcoin", "goldcoin", ALICE, 0)


def test_transaction_history(bridge):
    sent = bridge.create_cross_chain_transaction("goldcoin", "bitcoin", ALICE, BOB, 1.0)
    received = bridge.create_cross_chain_transaction("bitcoin", "goldcoin", BOB, ALICE, 2.0)
    bridge.create_cross_chain_transaction("bitcoin", "goldcoin", BOB, BOB, 3.0)
    history = bridge.get_transaction_history(ALICE)
    assert {tx.id for tx in history} == {sent.id, received.id}


def test_validate_chain_address_ok(bridge):
    bridge.validate_chain_address("ethereum", ALICE)
    assert len(ALICE) >= 20


def test_validate_chain_address_errors(bridge):
    with pytest.raises(CrossChainError, match="chain dogecoin not supported"):
        bridge.validate_chain_address("dogecoin", ALICE)
    with pytest.raises(CrossChainError, match="address cannot be empty"):
        bridge.validate_chain_address("ethereum", "")
    with pytest.raises(CrossChainError, match="invalid address format"):
        bridge.validate_chain_address("ethereum", "short")