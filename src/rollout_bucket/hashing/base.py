
from typing import Protocol

class Hasher(Protocol):
    def hash32(self, data: bytes, seed: int) -> int:
        """
        32bitの非暗号学的ハッシュ値を返す (signed / unsigned どちらでも可)。
        同じ data と seed に対しては常に同じ値を返すこと。
        """
        ...
