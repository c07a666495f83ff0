
import pytest
import time
from unittest.mock import patch
from rollout_bucket.bucketer import Bucketer
from rollout_bucket.config import ConfigManager, BucketerConfig
from rollout_bucket.hashing.adapter import Murmur3Hasher, XXHash32Hasher

@pytest.fixture
def mock_ssm_client():
    with patch('rollout_bucket.config.boto3.client') as mock:
        yield mock.return_value

def test_default_values():
    config = BucketerConfig()

    assert config.seed == 0
    assert config.hash_algorithm == "murmur3"

def test_get_config_ssm_success(mock_ssm_client):
    """SSMから設定が正しく取得できること"""
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': '/rollout/bucketer/seed', 'Value': '12345'},
            {'Name': '/rollout/bucketer/hash_algorithm', 'Value': 'xxhash32'}
        ]
    }

    manager = ConfigManager()
    config = manager.get_config()

    assert config.seed == 12345
    assert config.hash_algorithm == "xxhash32"

    mock_ssm_client.get_parameters.assert_called_once_with(
        Names=['/rollout/bucketer/seed', '/rollout/bucketer/hash_algorithm']
    )

def test_get_config_missing_parameters_use_defaults(mock_ssm_client):
    mock_ssm_client.get_parameters.return_value = {'Parameters': []}

    config = ConfigManager().get_config()

    assert config == BucketerConfig()

def test_get_config_ssm_failure_returns_default(mock_ssm_client, caplog):
    """SSM取得失敗時はデフォルト設定(seed=0, murmur3)を返すこと"""
    mock_ssm_client.get_parameters.side_effect = Exception("SSM access failed")

    manager = ConfigManager()
    with caplog.at_level("WARNING", logger="rollout_bucket"):
        config = manager.get_config()

    assert config == BucketerConfig()
    assert "config_fallback" in caplog.text
    assert "SSM access failed" in caplog.text

def test_get_config_invalid_seed_returns_default(mock_ssm_client):
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': '/rollout/bucketer/seed', 'Value': 'not-a-number'},
            {'Name': '/rollout/bucketer/hash_algorithm', 'Value': 'xxhash32'}
        ]
    }

    config = ConfigManager().get_config()

    assert config.seed == 0
    assert config.hash_algorithm == "murmur3"

def test_config_caching(mock_ssm_client):
    """設定がTTL内でキャッシュされること"""
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': '/rollout/bucketer/seed', 'Value': '42'}
        ]
    }

    manager = ConfigManager(ttl_seconds=60)

    # 1回目
    config1 = manager.get_config()
    assert config1.seed == 42

    # 2回目 (直後)
    config2 = manager.get_config()
    assert config2.seed == 42

    # SSMは1回しか呼ばれていないはず
    assert mock_ssm_client.get_parameters.call_count == 1

def test_config_cache_expiration(mock_ssm_client):
    """TTL経過後に再取得すること"""
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': '/rollout/bucketer/seed', 'Value': '1'}
        ]
    }

    manager = ConfigManager(ttl_seconds=0.1)

    manager.get_config()
    time.sleep(0.2) # TTL切れ待ち
    manager.get_config()

    assert mock_ssm_client.get_parameters.call_count == 2

def test_bucketer_from_config():
    bucketer = Bucketer.from_config(BucketerConfig(seed=42, hash_algorithm="xxhash32"))

    assert bucketer.seed == 42
    assert isinstance(bucketer.hasher, XXHash32Hasher)
    assert bucketer == Bucketer(seed=42, hasher=XXHash32Hasher())

def test_bucketer_from_default_config_matches_default_bucketer():
    bucketer = Bucketer.from_config(BucketerConfig())

    assert isinstance(bucketer.hasher, Murmur3Hasher)
    assert bucketer.bucket("new-ui", "user-123") == Bucketer().bucket("new-ui", "user-123")
