"""
Tests for payload validation and the in-memory user backend
"""
import threading

import pytest

from core.users import InvalidUserInput, UserNotFound
from core.users.validation import is_valid_email, validate_payload


@pytest.mark.users
class TestValidatePayload:

    def test_cleans_and_normalizes(self):
        cleaned = validate_payload({'name': '  Ann  ', 'email': '  Ann@EXAMPLE.com '})
        assert cleaned == {'name': 'Ann', 'email': 'ann@example.com'}

    def test_create_requires_every_field(self):
        with pytest.raises(InvalidUserInput) as exc:
            validate_payload({'name': 'Ann'})
        assert exc.value.errors == ['email is required']

    def test_unknown_fields_are_rejected(self):
        with pytest.raises(InvalidUserInput) as exc:
            validate_payload({'name': 'Ann', 'email': 'ann@example.com', 'role': 'admin'})
        assert 'Unknown field(s): role' in exc.value.errors

    def test_non_string_values_are_rejected(self):
        with pytest.raises(InvalidUserInput) as exc:
            validate_payload({'name': 42, 'email': 'ann@example.com'})
        assert 'name must be a string' in exc.value.errors

    def test_blank_values_are_rejected(self):
        with pytest.raises(InvalidUserInput) as exc:
            validate_payload({'name': '   ', 'email': 'ann@example.com'})
        assert 'name cannot be blank' in exc.value.errors

    def test_invalid_email(self):
        with pytest.raises(InvalidUserInput) as exc:
            validate_payload({'name': 'Ann', 'email': 'notanemail'})
        assert 'Invalid email address' in exc.value.errors

    def test_partial_only_checks_present_fields(self):
        assert validate_payload({'name': 'Bo'}, partial=True) == {'name': 'Bo'}

    def test_partial_requires_at_least_one_field(self):
        with pytest.raises(InvalidUserInput) as exc:
            validate_payload({}, partial=True)
        assert exc.value.errors == ['No fields to update']

    def test_collects_all_errors(self):
        with pytest.raises(InvalidUserInput) as exc:
            validate_payload({'extra': 'x'})
        assert len(exc.value.errors) == 3
        assert exc.value.status_code == 422

    @pytest.mark.parametrize('email,expected', [
        ('ann@example.com', True),
        ('a@b.co', True),
        ('ann@example', False),
        ('@example.com', False),
        ('ann@@example.com', False),
        ('ann@.com', False),
        ('ann@example.', False),
    ])
    def test_email_shape(self, email, expected):
        assert is_valid_email(email) is expected


@pytest.mark.users
class TestInMemoryUserStore:

    def test_create_assigns_incrementing_ids(self, memory_store):
        first = memory_store.create({'name': 'Ann', 'email': 'ann@example.com'})
        second = memory_store.create({'name': 'Ben', 'email': 'ben@example.com'})

        assert (first.id, second.id) == (1, 2)
        assert len(memory_store) == 2

    def test_list_is_ordered_by_id(self, memory_store):
        memory_store.create({'name': 'Ann', 'email': 'ann@example.com'})
        memory_store.create({'name': 'Ben', 'email': 'ben@example.com'})

        assert [u.name for u in memory_store.list()] == ['Ann', 'Ben']

    def test_retrieve_unknown_id(self, memory_store):
        with pytest.raises(UserNotFound) as exc:
            memory_store.retrieve(12)
        assert exc.value.user_id == 12
        assert exc.value.status_code == 404

    def test_duplicate_email_rejected(self, memory_store):
        memory_store.create({'name': 'Ann', 'email': 'ann@example.com'})

        with pytest.raises(InvalidUserInput) as exc:
            memory_store.create({'name': 'Other Ann', 'email': 'ANN@example.com'})
        assert exc.value.errors == ['Email is already taken']

    def test_update_replaces_only_given_fields(self, memory_store):
        created = memory_store.create({'name': 'Ann', 'email': 'ann@example.com'})

        updated = memory_store.update({'name': 'Annie'}, created.id)

        assert updated.name == 'Annie'
        assert updated.email == 'ann@example.com'
        assert updated.created_at == created.created_at
        assert memory_store.retrieve(created.id) == updated

    def test_update_keeping_own_email_is_allowed(self, memory_store):
        created = memory_store.create({'name': 'Ann', 'email': 'ann@example.com'})

        updated = memory_store.update({'name': 'Ann', 'email': 'ann@example.com'}, created.id)

        assert updated.email == 'ann@example.com'

    def test_update_to_taken_email(self, memory_store):
        memory_store.create({'name': 'Ann', 'email': 'ann@example.com'})
        ben = memory_store.create({'name': 'Ben', 'email': 'ben@example.com'})

        with pytest.raises(InvalidUserInput):
            memory_store.update({'email': 'ann@example.com'}, ben.id)

    def test_update_unknown_id(self, memory_store):
        with pytest.raises(UserNotFound):
            memory_store.update({'name': 'Ghost'}, 3)

    def test_delete_then_delete_again(self, memory_store):
        created = memory_store.create({'name': 'Ann', 'email': 'ann@example.com'})

        memory_store.delete(created.id)

        assert memory_store.list() == []
        with pytest.raises(UserNotFound):
            memory_store.delete(created.id)

    def test_ids_are_not_reused_after_delete(self, memory_store):
        first = memory_store.create({'name': 'Ann', 'email': 'ann@example.com'})
        memory_store.delete(first.id)

        second = memory_store.create({'name': 'Ben', 'email': 'ben@example.com'})

        assert second.id == 2

    def test_concurrent_creates_get_unique_ids(self, memory_store):
        def worker(n):
            memory_store.create({'name': f'User {n}', 'email': f'user{n}@example.com'})

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [u.id for u in memory_store.list()]
        assert ids == list(range(1, 21))

    def test_record_to_dict(self, memory_store):
        created = memory_store.create({'name': 'Ann', 'email': 'ann@example.com'})

        data = created.to_dict()

        assert data['id'] == created.id
        assert data['email'] == 'ann@example.com'
        assert 'created_at' in data
