
import json
import logging
from typing import Any

logger = logging.getLogger("rollout_bucket")
logger.setLevel(logging.INFO)
# Handler設定は実行環境に依存するため、ここでは標準出力への出力のみを想定
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(message)s'))
logger.addHandler(handler)

def log_decision(event: str, feature: str, identifier: str, seed: int, bucket: int, **fields: Any):
    """
    バケット判定結果を構造化ログ(JSON)として DEBUG で出力する。
    DEBUG が無効な場合はJSONの生成自体を行わない。
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    log_data = {
        "event": event,
        "feature": feature,
        "identifier": identifier,
        "seed": seed,
        "bucket": bucket,
        **fields
    }

    logger.debug(json.dumps(log_data, default=str))

def log_config_fallback(reason: str):
    log_data = {
        "event": "config_fallback",
        "reason": reason,
    }

    logger.warning(json.dumps(log_data))
