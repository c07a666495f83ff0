
import time
import boto3
from dataclasses import dataclass
from typing import Optional

from rollout_bucket.hashing.api import DEFAULT_HASH_ALGORITHM
from rollout_bucket.observability.logging import log_config_fallback

SEED_PARAM = '/rollout/bucketer/seed'
HASH_ALGORITHM_PARAM = '/rollout/bucketer/hash_algorithm'

@dataclass
class BucketerConfig:
    seed: int = 0
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM

class ConfigManager:
    def __init__(self, ttl_seconds: float = 60.0):
        self.ttl_seconds = ttl_seconds
        self._cached_config: Optional[BucketerConfig] = None
        self._last_fetched_at: float = 0.0
        self._ssm_client = boto3.client('ssm')

    def get_config(self) -> BucketerConfig:
        current_time = time.time()

        if self._cached_config and (current_time - self._last_fetched_at < self.ttl_seconds):
            return self._cached_config

        try:
            config = self._fetch_from_ssm()
            self._cached_config = config
            self._last_fetched_at = current_time
            return config
        except Exception as e:
            log_config_fallback(f"{type(e).__name__}: {e}")
            return self._get_default_config()

    def _fetch_from_ssm(self) -> BucketerConfig:
        names = [SEED_PARAM, HASH_ALGORITHM_PARAM]

        response = self._ssm_client.get_parameters(Names=names)
        params = {p['Name']: p['Value'] for p in response.get('Parameters', [])}

        # seedの値が壊れている場合は ValueError となり、デフォルトに倒れる
        seed = int(params.get(SEED_PARAM, '0'))
        hash_algorithm = params.get(HASH_ALGORITHM_PARAM, DEFAULT_HASH_ALGORITHM)

        return BucketerConfig(
            seed=seed,
            hash_algorithm=hash_algorithm
        )

    def _get_default_config(self) -> BucketerConfig:
        # 既存のバケット割当てを変えないよう seed=0, murmur3 に倒す
        return BucketerConfig()
