import pytest

from bituncoin.goldcoin import GoldCoin, GoldCoinError, Transaction


def test_new_goldcoin_defaults():
    gc = GoldCoin()
    assert gc.name == "Gold-Coin"
    assert gc.symbol == "GLD"
    assert gc.max_supply == 100000000
    assert gc.decimals == 8


def test_create_transaction():
    gc = GoldCoin()
    tx = gc.create_transaction("from_addr", "to_addr", 100.0)
    assert tx.amount == 100.0
    assert tx.fee == 100.0 * gc.tx_fee
    assert tx.sender == "from_addr"
    assert tx.recipient == "to_addr"
    assert tx.id == tx.generate_id()
    assert len(tx.id) == 64


@pytest.mark.parametrize("amount", [0, -100])
def test_create_transaction_invalid_amount(amount):
    with pytest.raises(GoldCoinError, match="invalid amount"):
        GoldCoin().create_transaction("from_addr", "to_addr", amount)


@pytest.mark.parametrize("sender,recipient", [("", "to_addr"), ("from_addr", "")])
def test_create_transaction_invalid_addresses(sender, recipient):
    with pytest.raises(GoldCoinError, match="invalid addresses"):
        GoldCoin().create_transaction(sender, recipient, 100)


def test_validate_transaction():
    gc = GoldCoin()
    tx = gc.create_transaction("from_addr", "to_addr", 100.0)
    assert gc.validate_transaction(tx) is None


def test_validate_transaction_tampered_amount():
    gc = GoldCoin()
    tx = gc.create_transaction("from_addr", "to_addr", 100.0)
    tx.amount = 200.0
    with pytest.raises(GoldCoinError, match="invalid transaction ID"):
        gc.validate_transaction(tx)


def test_validate_transaction_none():
    with pytest.raises(GoldCoinError, match="nil"):
        GoldCoin().validate_transaction(None)


def test_validate_transaction_bad_fields():
    gc = GoldCoin()
    tx = Transaction(sender="a", recipient="b", amount=0)
    with pytest.raises(GoldCoinError, match="invalid amount"):
        gc.validate_transaction(tx)
    tx = Transaction(sender="", recipient="b", amount=1)
    with pytest.raises(GoldCoinError, match="invalid addresses"):
        gc.validate_transaction(tx)


def test_generate_id_depends_on_timestamp():
    a = Transaction(sender="a", recipient="b", amount=1.0, timestamp=1)
    b = Transaction(sender="a", recipient="b", amount=1.0, timestamp=2)
    assert a.generate_id() == a.generate_id()
    assert a.generate_id() != b.generate_id()


def test_mint():
    gc = GoldCoin()
    gc.mint(1000000)
    assert gc.circ_supply == 1000000


def test_mint_exceeds_max_supply():
    gc = GoldCoin()
    with pytest.raises(GoldCoinError, match="exceed max supply"):
        gc.mint(gc.max_supply + 1)
    assert gc.circ_supply == 0


def test_mint_up_to_max_supply():
    gc = GoldCoin()
    gc.mint(gc.max_supply)
    assert gc.circ_supply == gc.max_supply
    with pytest.raises(GoldCoinError):
        gc.mint(1)


def test_get_tokenomics():
    gc = GoldCoin()
    tokenomics = gc.get_tokenomics()
    assert tokenomics["name"] == "Gold-Coin"
    assert tokenomics["symbol"] == "GLD"
    assert tokenomics["maxSupply"] == 100000000
    assert tokenomics["transactionFee"] == gc.tx_fee