"""
Configuration Unit Tests
Tests for hashtree/config/runtime.py and hashtree/config/logging.py
"""
import logging

import pytest

from fixtures.trees import H
from hashtree.config import (
    DigestConfig,
    TreeConfig,
    get_default_config,
    set_default_config,
    setup_logging,
)
from hashtree.merkle import MerkleTree
from hashtree.schemas.errors import InvalidDigestFunctionException


class TestTreeConfig:
    """Tests for TreeConfig loading."""

    def test_defaults(self):
        config = TreeConfig()

        assert config.digest.algorithm == "sha256"
        assert config.logging.level == "INFO"
        assert config.logging.file is None

    def test_from_dict_partial(self):
        config = TreeConfig.from_dict({"digest": {"algorithm": "blake2b"}})

        assert config.digest.algorithm == "blake2b"
        assert config.logging.level == "INFO"

    def test_to_dict_round_trip(self):
        config = TreeConfig.from_dict({
            "digest": {"algorithm": "sha512"},
            "logging": {"level": "DEBUG", "file": "tree.log"},
        })

        assert TreeConfig.from_dict(config.to_dict()) == config

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HASHTREE_DIGEST_ALGORITHM", "sha3_256")
        monkeypatch.setenv("HASHTREE_LOG_LEVEL", "DEBUG")

        config = TreeConfig.from_env()

        assert config.digest.algorithm == "sha3_256"
        assert config.logging.level == "DEBUG"

    def test_with_env_overrides(self, monkeypatch):
        base = TreeConfig(digest=DigestConfig(algorithm="sha256"))
        monkeypatch.setenv("HASHTREE_DIGEST_ALGORITHM", "blake2s")

        config = base.with_env_overrides()

        assert config.digest.algorithm == "blake2s"
        assert base.digest.algorithm == "sha256"

    def test_with_env_overrides_no_env(self, monkeypatch):
        for name in ("HASHTREE_DIGEST_ALGORITHM", "HASHTREE_LOG_LEVEL", "HASHTREE_LOG_FILE"):
            monkeypatch.delenv(name, raising=False)
        base = TreeConfig()

        assert base.with_env_overrides() is base

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "hashtree.yaml"
        path.write_text("digest:\n  algorithm: blake2b\nlogging:\n  level: WARNING\n")

        config = TreeConfig.from_yaml(path)

        assert config.digest.algorithm == "blake2b"
        assert config.logging.level == "WARNING"

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TreeConfig.from_yaml(tmp_path / "missing.yaml")

    def test_default_config_is_cached(self, monkeypatch):
        monkeypatch.delenv("HASHTREE_DIGEST_ALGORITHM", raising=False)

        assert get_default_config() is get_default_config()

        custom = TreeConfig.from_dict({"digest": {"algorithm": "md5"}})
        set_default_config(custom)

        assert get_default_config() is custom


class TestTreeFromConfig:
    """Tests for MerkleTree.from_config()."""

    def test_uses_configured_algorithm(self):
        config = TreeConfig.from_dict({"digest": {"algorithm": "blake2b"}})

        tree = MerkleTree.from_config([b"a"], config)

        assert tree.digest.name == "blake2b"

    def test_default_config_is_sha256(self, monkeypatch):
        monkeypatch.delenv("HASHTREE_DIGEST_ALGORITHM", raising=False)

        tree = MerkleTree.from_config([b"a", b"b"])
        tree.generate()

        assert tree.root_digest() == H(H(b"a") + H(b"b"))

    def test_unknown_algorithm_rejected(self):
        config = TreeConfig.from_dict({"digest": {"algorithm": "nope"}})

        with pytest.raises(InvalidDigestFunctionException):
            MerkleTree.from_config([b"a"], config)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_sets_level_and_file_handler(self, tmp_path):
        log_file = tmp_path / "tree.log"
        root = logging.getLogger()
        saved_level = root.level
        saved_handlers = list(root.handlers)

        try:
            setup_logging("DEBUG", str(log_file))
            logging.getLogger("hashtree.test").debug("hello")

            assert root.level == logging.DEBUG
            assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
        finally:
            for handler in list(root.handlers):
                handler.close()
                root.removeHandler(handler)
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)

        assert "hello" in log_file.read_text()


class TestConfigSections:
    """TreeConfig carries only the digest and logging sections."""

    def test_to_dict_sections(self):
        assert set(TreeConfig().to_dict()) == {"digest", "logging"}

    def test_unknown_section_ignored(self):
        config = TreeConfig.from_dict({"extra": {"owner": "tests"}})

        assert config == TreeConfig()
