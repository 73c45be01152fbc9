# bituncoin

A small, self-contained toolkit for the Gold-Coin (GLD) token. Everything
lives in memory, apart from the file-backed key-value store. It is meant for
experimenting with the moving parts of a proof-of-stake currency:

- `bituncoin.goldcoin` – token parameters (`GoldCoin`), transaction creation
  and validation (`Transaction`), minting up to the maximum supply.
- `bituncoin.staking` – `StakingPool`, a staking pool with a lock period and
  time-based annual rewards.
- `bituncoin.chain` – `Blockchain`, a linked chain of blocks with index and
  previous-hash checks, starting from a genesis block.
- `bituncoin.consensus` – `ProofOfStake`: validator registration,
  stake-weighted validator selection, block creation and validation.
- `bituncoin.identity` – `AddressManager` for address generation, lookup and
  message signing, plus `validate_address` and `verify_signature`.
- `bituncoin.storage` – `FileStore`, a key-value store kept in a directory of
  `.dat` files, with JSON helpers.
- `bituncoin.crosschain` – `CrossChainBridge`, with fee estimation, swaps and
  transaction history.
- `bituncoin.security` – `Security` for AES-256-GCM encryption and encrypted
  backups, plus `hash_password`, `verify_password` and
  `generate_recovery_phrase`.
- `bituncoin.payments` – `BtnPay`, the BTN-PAY invoice service, and its
  request handlers.
- `bituncoin.node` – `Node`, an HTTP API server that routes requests to its
  handlers.

Errors are raised as exceptions: `GoldCoinError`, `StakingError`,
`ChainError`, `ConsensusError`, `IdentityError`, `StorageError`,
`CrossChainError`, `SecurityError`, `PaymentError` and `NodeError`, each in
its own module.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Walk-through

```
bituncoin-demo
```

runs a short tour. It prints the tokenomics, generates two addresses and
creates a transaction. It then registers both addresses as validators, forges
a block, opens a stake and shows the rewards accrued so far.

## Using the library

### Tokens and transactions

```python
from bituncoin.goldcoin import GoldCoin

gc = GoldCoin()
tx = gc.create_transaction("sender_addr", "recipient_addr", 100.0)
gc.validate_transaction(tx)      # raises GoldCoinError if the ID does not match
gc.mint(1_000_000)               # raises once the maximum supply would be exceeded
print(gc.get_tokenomics()["symbol"])   # GLD
```

The transaction fee is 0.1% of the amount. Amounts must be positive and both
addresses non-empty. The maximum supply is 100,000,000.

### Staking

```python
from bituncoin.staking import StakingPool

pool = StakingPool()
pool.create_stake("address1", 500.0)     # minimum stake is 100 GLD
pool.increase_stake("address1", 300.0)
print(pool.calculate_rewards("address1"))
print(pool.get_pool_info()["totalStaked"])   # 800.0
```

Rewards accrue at 5% a year. Stakes are locked for 30 days. While the lock is
in place, `unstake` raises. After that, it returns the staked amount and the
unclaimed rewards. `claim_rewards` returns what was claimed and raises if
there is nothing to claim. The reward rate, minimum stake, lock period and
clock can be passed to the constructor as keyword arguments.

### Blockchain

```python
from bituncoin.chain import Block, Blockchain

chain = Blockchain()
genesis = chain.get_latest_block()
chain.add_block(Block(index=1, prev_hash=genesis.hash, hash="h1"))
chain.validate_chain()
print(chain.get_blockchain_info())   # blocks, difficulty, latestHash
```

### Proof of stake

```python
from bituncoin.consensus import ProofOfStake

pos = ProofOfStake()
pos.register_validator("validator1", 2000.0)   # minimum stake is 1000 GLD
block = pos.create_block(["tx1", "tx2"], "0000000000")
pos.validate_block(block)
```

Validators are chosen at random, weighted by stake. Each forged block adds
2 GLD to its validator's stake. `unstake_validator` removes a validator and
returns its stake.

### Addresses

```python
from bituncoin.identity import AddressManager, validate_address

manager = AddressManager()
addr = manager.generate_address("Alice")
validate_address(addr.address)        # "GLD" followed by 40 hex digits
signature = manager.sign_message(addr.address, "hello")
```

### Storage

```python
from bituncoin.storage import FileStore

with FileStore("data") as store:
    store.put("greeting", b"hello")
    store.put_json("config", {"network": "bituncoin-mainnet"})
    print(store.get_json("config"))
```

Each key is written to `<key>.dat` in the data directory. The files found
there are loaded when the store is opened. `close` writes every value once
more and empties the in-memory cache.

### Cross-chain bridge

```python
from bituncoin.crosschain import CrossChainBridge

bridge = CrossChainBridge()
fee = bridge.estimate_cross_chain_fee("goldcoin", "ethereum", 100.0)
tx_id = bridge.swap_tokens("goldcoin", "bitcoin", "GLD0000000000000000000", 50.0)
print(bridge.get_transaction_status(tx_id).status)   # pending
```

The supported chains are `goldcoin`, `bitcoin`, `ethereum` and `binance`. A
transfer costs 1% of the amount. The estimate adds a fixed network fee of
0.001.

### Wallet security

```python
from bituncoin.security import Security, generate_recovery_phrase, hash_password

security = Security()
backup = security.create_backup(b"wallet contents")
assert security.restore_backup(backup) == b"wallet contents"
print(generate_recovery_phrase())   # twelve words
print(hash_password("password"))    # base64 of the SHA-256 digest
```

### Payments

```python
from bituncoin.payments import BtnPay

pay = BtnPay()
invoice = pay.create_invoice("merchant1", 25.0, "coffee", 900)
pay.mark_paid(invoice.id, "tx_abc")
print(pay.get_invoice(invoice.id).status)   # InvoiceStatus.PAID
```

`get_invoice` marks a pending invoice as expired once its time has passed.
The handlers take the request method, path or JSON body and return an
`HttpResponse` (status, body, content type):

- `handle_create_invoice`
- `handle_get_invoice`
- `handle_pay_invoice`

When creating an invoice, a missing `ttlSeconds` defaults to 15 minutes.

### Node

```python
from bituncoin.node import Node

node = Node("localhost", 0)        # port 0 picks a free port
node.start()
print(node.port)
print(node.get_node_info().to_dict())
response = node.dispatch("GET", "/api/balance", "address=GLDabc", b"")
node.stop()
```

`start` serves HTTP in a background thread until `stop` is called. `dispatch`
answers a request without going through the network. The routes are:

- `/api/info` and `/api/health`
- `/api/goldcoin/balance`
- `/api/goldcoin/send` and `/api/goldcoin/stake` (POST)
- `/api/goldcoin/validators`
- `/api/btnpay/invoice` (POST)
- `/api/btnpay/invoice/{id}`
- `/api/btnpay/pay` (POST)

Any other path gets a 404.

## What it does not do

- The pieces are not wired together. The node does not keep a chain, a
  ledger or a staking pool.
- The balance endpoint always reports a balance and stake of 0.
- The send endpoint always answers with the same pending transaction ID.
- The validators endpoint returns two fixed example validators.
- Nothing is persisted except what you put in a `FileStore`.
- Nodes do not talk to peers. There is no networked consensus.
- `verify_signature` only checks that a signature is 64 characters long. It
  does not check the signature against the message.
- The cross-chain bridge only records transfers. It never contacts another
  chain.
- Payments are marked paid on request, without checking the transaction.