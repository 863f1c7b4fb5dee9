"""Test ID generation and collision detection"""

import pytest
from unittest.mock import patch, MagicMock

from taskboard.storage.id_generator import (
    generate_random_string,
    generate_record_id,
    record_exists,
)
from taskboard.storage.migrations import save_project_config
from taskboard.models import Board, BoardColumn, Task, User

class TestIdGeneration:
    """Test record ID generation functionality"""

    def test_generate_random_string_default_length(self):
        """Test random string generation with default length"""
        result = generate_random_string()
        assert len(result) == 6
        assert result.isalnum()
        assert result == result.lower()

    def test_generate_random_string_custom_length(self):
        """Test random string generation with custom length"""
        result = generate_random_string(12)
        assert len(result) == 12
        assert result.isalnum()

    def test_generate_random_string_uniqueness(self):
        """Test that random strings are different"""
        results = [generate_random_string() for _ in range(100)]
        # Should have mostly unique results (allow for rare collisions)
        assert len(set(results)) > 95

    def test_record_exists_with_database(self, test_session):
        """Test record_exists with actual database"""
        test_session.add(User(id="tb-u-abc123", name="Ada", email="ada@example.com"))
        test_session.commit()

        assert record_exists(test_session, User, "tb-u-abc123") == True
        assert record_exists(test_session, User, "tb-u-zzz999") == False

    @pytest.mark.parametrize("model,tag", [(User, "u"), (Board, "b"), (BoardColumn, "c"), (Task, "t")])
    def test_generate_record_id_default_config(self, clean_taskboard_dir, model, tag):
        """Test ID generation with default configuration"""
        with patch('taskboard.storage.id_generator.record_exists', return_value=False):
            record_id = generate_record_id(MagicMock(), model)

            parts = record_id.split("-")
            assert parts[0] == "tb"
            assert parts[1] == tag
            assert len(parts[2]) == 6

    def test_generate_record_id_custom_config(self, clean_taskboard_dir):
        """Test ID generation with custom prefix"""
        save_project_config({"id_prefix": "acme"})

        with patch('taskboard.storage.id_generator.record_exists', return_value=False):
            record_id = generate_record_id(MagicMock(), Task)

            assert record_id.startswith("acme-t-")

    def test_generate_record_id_collision_retry(self, clean_taskboard_dir):
        """Test ID generation retries on collision"""
        collision_count = 0

        def mock_record_exists(session, model, record_id):
            nonlocal collision_count
            collision_count += 1
            # First 3 attempts collide, then succeed
            return collision_count <= 3

        with patch('taskboard.storage.id_generator.record_exists', side_effect=mock_record_exists):
            record_id = generate_record_id(MagicMock(), Board)

            # Should have tried 4 times (3 collisions + 1 success)
            assert collision_count == 4
            assert record_id.startswith("tb-b-")

    def test_generate_record_id_fallback_longer_suffix(self, clean_taskboard_dir):
        """Test ID generation falls back to longer suffix after many collisions"""
        def mock_record_exists(session, model, record_id):
            # Every 6-char suffix collides
            return len(record_id.split("-")[2]) == 6

        with patch('taskboard.storage.id_generator.record_exists', side_effect=mock_record_exists):
            record_id = generate_record_id(MagicMock(), Task)

            parts = record_id.split("-")
            assert len(parts) == 3
            assert len(parts[2]) == 12

    def test_generate_record_id_ultimate_fallback(self, clean_taskboard_dir):
        """Test ID generation ultimate fallback with timestamp"""
        with patch('taskboard.storage.id_generator.record_exists', return_value=True):
            with patch('time.time', return_value=1234567890):
                record_id = generate_record_id(MagicMock(), Task)

                parts = record_id.split("-")
                assert len(parts) == 4  # prefix-tag-random-timestamp
                assert parts[3] == "7890"  # Last 4 digits of timestamp

class TestIdGenerationIntegration:
    """Integration tests for ID generation"""

    def test_generate_unique_ids_bulk(self, clean_taskboard_dir):
        """Test generating many IDs to ensure uniqueness"""
        with patch('taskboard.storage.id_generator.record_exists', return_value=False):
            ids = [generate_record_id(MagicMock(), Task) for _ in range(1000)]

            # All IDs should be unique
            assert len(set(ids)) == 1000

    def test_collision_detection_realistic(self, test_session):
        """Test that generated IDs never reuse an existing one"""
        existing_ids = [f"tb-u-user0{i}" for i in range(3)]
        for i, user_id in enumerate(existing_ids):
            test_session.add(User(id=user_id, name=f"User {i}", email=f"user{i}@example.com"))
        test_session.commit()

        for _ in range(50):
            assert generate_record_id(test_session, User) not in existing_ids
