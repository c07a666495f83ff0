
from dataclasses import dataclass
from typing import Callable

import mmh3
import xxhash

from rollout_bucket.hashing.base import Hasher

SEED_MASK = 0xFFFFFFFF

def to_hash_seed(seed: int) -> int:
    # ハッシュライブラリは unsigned 32bit の seed しか受け付けないため丸める
    return int(seed) & SEED_MASK

@dataclass(frozen=True)
class Murmur3Hasher(Hasher):
    """
    MurmurHash3 x86 32bit (signed)。
    既存のバケット割当てと互換性を保つためのデフォルト実装。
    """

    def hash32(self, data: bytes, seed: int) -> int:
        return mmh3.hash(data, to_hash_seed(seed), signed=True)

@dataclass(frozen=True)
class XXHash32Hasher(Hasher):
    """
    xxHash32 (unsigned)。
    Murmur3 から切り替えると全てのバケットが変わる点に注意。
    """

    def hash32(self, data: bytes, seed: int) -> int:
        return xxhash.xxh32_intdigest(data, seed=to_hash_seed(seed))

@dataclass(frozen=True)
class FunctionHasherAdapter(Hasher):
    """
    既存の (bytes, seed) -> int 関数をラップし、
    Hasherインターフェースに適合させるアダプター
    """
    hash_func: Callable[[bytes, int], int]

    def hash32(self, data: bytes, seed: int) -> int:
        return self.hash_func(data, to_hash_seed(seed))
