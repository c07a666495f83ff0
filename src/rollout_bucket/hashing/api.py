
from rollout_bucket.hashing.base import Hasher
from rollout_bucket.hashing.adapter import Murmur3Hasher, XXHash32Hasher

DEFAULT_HASH_ALGORITHM = "murmur3"

def get_hasher(name: str = DEFAULT_HASH_ALGORITHM) -> Hasher:
    """
    Factory function to get the Hasher for a configured algorithm name.

    Args:
        name (str): "murmur3" or "xxhash32"

    Returns:
        Hasher: An instance of a class implementing hash32.
    """
    if name == "xxhash32":
        return XXHash32Hasher()
    else:
        # Default or "murmur3"
        return Murmur3Hasher()
