import pytest

from bituncoin.consensus import Block, ConsensusError, ProofOfStake


def test_new_proof_of_stake_defaults():
    pos = ProofOfStake()
    assert pos.min_stake == 1000.0
    assert pos.block_time == 10
    assert pos.reward_per_block == 2.0


def test_register_validator():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    validator = pos.get_validator_info("validator1")
    assert validator.staked_amount == 2000.0
    assert validator.is_active


def test_register_validator_below_min_stake():
    pos = ProofOfStake()
    with pytest.raises(ConsensusError, match="insufficient stake"):
        pos.register_validator("validator1", 500.0)


def test_register_validator_duplicate():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    with pytest.raises(ConsensusError, match="already registered"):
        pos.register_validator("validator1", 2000.0)


def test_register_validator_empty_address():
    pos = ProofOfStake()
    with pytest.raises(ConsensusError, match="invalid address"):
        pos.register_validator("", 2000.0)


def test_select_validator():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    pos.register_validator("validator2", 3000.0)
    validator = pos.select_validator()
    assert validator.address in {"validator1", "validator2"}


def test_select_validator_no_validators():
    pos = ProofOfStake()
    with pytest.raises(ConsensusError, match="no validators available"):
        pos.select_validator()


def test_select_validator_no_active_validators():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    pos.get_validator_info("validator1").is_active = False
    with pytest.raises(ConsensusError, match="no active validators"):
        pos.select_validator()


@pytest.mark.parametrize(
    "draw, expected",
    [(0.0, "validator1"), (0.3, "validator1"), (0.5, "validator2"), (0.99, "validator2")],
)
def test_select_validator_is_stake_weighted(draw, expected):
    pos = ProofOfStake(random_source=lambda: draw)
    pos.register_validator("validator1", 2000.0)
    pos.register_validator("validator2", 3000.0)
    assert pos.select_validator().address == expected


def test_select_validator_skips_inactive():
    pos = ProofOfStake(random_source=lambda: 0.0)
    pos.register_validator("validator1", 2000.0)
    pos.register_validator("validator2", 3000.0)
    pos.get_validator_info("validator1").is_active = False
    assert pos.select_validator().address == "validator2"


def test_create_block():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    transactions = ["tx1", "tx2", "tx3"]
    prev_hash = "0000000000"
    block = pos.create_block(transactions, prev_hash)
    assert block.index == 1
    assert block.prev_hash == prev_hash
    assert len(block.transactions) == 3
    assert len(block.hash) == 64
    assert block.hash == block.calculate_hash()


def test_create_block_increments_index_and_rewards():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    first = pos.create_block(["tx1"], "0")
    second = pos.create_block(["tx2"], first.hash)
    assert (first.index, second.index) == (1, 2)
    assert pos.get_validator_info("validator1").staked_amount == 2004.0


def test_create_block_without_validators_fails():
    pos = ProofOfStake()
    with pytest.raises(ConsensusError):
        pos.create_block(["tx1"], "0")


def test_block_hash_depends_on_content():
    a = Block(index=1, prev_hash="0", validator="v", transactions=["tx1"], timestamp=100)
    b = Block(index=1, prev_hash="0", validator="v", transactions=["tx2"], timestamp=100)
    c = Block(index=1, prev_hash="0", validator="v", transactions=["tx1"], timestamp=100)
    assert a.calculate_hash() == c.calculate_hash()
    assert a.calculate_hash() != b.calculate_hash()


def test_validate_block():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    block = pos.create_block(["tx1"], "0000000000")
    assert pos.validate_block(block) is None


def test_validate_block_invalid_hash():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    block = pos.create_block(["tx1"], "0000000000")
    block.hash = "invalid_hash"
    with pytest.raises(ConsensusError, match="invalid block hash"):
        pos.validate_block(block)


def test_validate_block_none():
    with pytest.raises(ConsensusError, match="block is nil"):
        ProofOfStake().validate_block(None)


def test_validate_block_unknown_validator():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    block = pos.create_block(["tx1"], "0")
    pos.unstake_validator("validator1")
    with pytest.raises(ConsensusError, match="validator not found"):
        pos.validate_block(block)


def test_validate_block_inactive_validator():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    block = pos.create_block(["tx1"], "0")
    pos.get_validator_info("validator1").is_active = False
    with pytest.raises(ConsensusError, match="not active"):
        pos.validate_block(block)


def test_unstake_validator():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    assert pos.unstake_validator("validator1") == 2000.0
    with pytest.raises(ConsensusError):
        pos.get_validator_info("validator1")


def test_unstake_unknown_validator():
    with pytest.raises(ConsensusError, match="validator not found"):
        ProofOfStake().unstake_validator("missing")


def test_get_all_validators():
    pos = ProofOfStake()
    pos.register_validator("validator1", 2000.0)
    pos.register_validator("validator2", 3000.0)
    pos.register_validator("validator3", 1500.0)
    validators = pos.get_all_validators()
    assert len(validators) == 3
    assert {v.address for v in validators} == {"validator1", "validator2", "validator3"}