"""
Unit tests for LocalStorageRepository.
"""
import os
from unittest.mock import patch
import pytest
from src.repositories.local_repository import LocalStorageRepository
from src.core.exceptions import NotFoundException, PersistenceException


class TestLocalStorageRepository:
    """Test suite for LocalStorageRepository."""

    @pytest.fixture
    def repo(self, tmp_path):
        return LocalStorageRepository(root=str(tmp_path / "storage"))

    def test_put_and_get(self, repo, tmp_path):
        """Test content is written below the root and read back."""
        location = repo.put("uploads/a.csv", b"id,qty\n1,5")

        assert location == str(tmp_path / "storage" / "uploads" / "a.csv")
        assert repo.get("uploads/a.csv") == b"id,qty\n1,5"

    def test_put_overwrites(self, repo):
        repo.put("k", b"one")
        repo.put("k", b"two")

        assert repo.get("k") == b"two"

    def test_get_missing(self, repo):
        with pytest.raises(NotFoundException):
            repo.get("uploads/missing.csv")

    def test_keys_cannot_escape_root(self, repo):
        """Test traversal keys are treated as missing."""
        with pytest.raises(NotFoundException):
            repo.get("../../etc/passwd")

    def test_unwritable_location(self, repo):
        """Test OS errors become PersistenceException."""
        with patch("src.repositories.local_repository.os.makedirs", side_effect=PermissionError("denied")):
            with pytest.raises(PersistenceException) as exc_info:
                repo.put("uploads/a.csv", b"x")
        assert "denied" in exc_info.value.details

    def test_root_defaults_to_settings(self, local_settings):
        repo = LocalStorageRepository()

        assert repo.root == os.path.abspath(local_settings.storage_root)
