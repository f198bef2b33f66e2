"""Tests for the manage_users command line tool."""

from unittest.mock import MagicMock

import pytest

import manage_users
from user_crud_client import UserCrudAPI

ADA = {"id": 1, "email": "ada@lovelace.io", "firstName": "Ada", "lastName": "Lovelace"}


@pytest.fixture
def api():
    return MagicMock(spec=UserCrudAPI)


class TestFormatTable:
    def test_empty(self):
        assert manage_users.format_table([]) == "No users found."

    def test_columns_aligned(self):
        lines = manage_users.format_table([ADA]).splitlines()
        assert lines[0].split() == ["ID", "Email", "First", "Name", "Last", "Name"]
        assert lines[2].split() == ["1", "ada@lovelace.io", "Ada", "Lovelace"]
        assert lines[0].index("Email") == lines[2].index("ada@lovelace.io")


class TestCommands:
    def test_list(self, api, capsys):
        api.list_users.return_value = ([ADA], None)
        assert manage_users.main(["list"], client=api) == 0
        assert "ada@lovelace.io" in capsys.readouterr().out

    def test_create(self, api, capsys):
        api.create_user.return_value = (ADA, None)
        code = manage_users.main(
            ["create", "--email", "ada@lovelace.io", "--first-name", "Ada", "--last-name", "Lovelace"],
            client=api,
        )
        assert code == 0
        api.create_user.assert_called_once_with(
            {"email": "ada@lovelace.io", "firstName": "Ada", "lastName": "Lovelace"}
        )

    def test_update_sends_only_given_fields(self, api):
        api.update_user.return_value = ({**ADA, "lastName": "King"}, None)
        assert manage_users.main(["update", "1", "--last-name", "King"], client=api) == 0
        api.update_user.assert_called_once_with(1, {"lastName": "King"})

    def test_update_without_fields(self, api, capsys):
        assert manage_users.main(["update", "1"], client=api) == 1
        api.update_user.assert_not_called()
        assert "Nothing to update" in capsys.readouterr().err

    def test_delete(self, api, capsys):
        api.delete_user.return_value = (True, None)
        assert manage_users.main(["delete", "1"], client=api) == 0
        assert capsys.readouterr().out.strip() == "Deleted user 1"

    def test_server_error_reported(self, api, capsys):
        api.get_user.return_value = (None, {"status_code": 404, "message": "User with ID 9 not found"})
        assert manage_users.main(["show", "9"], client=api) == 1
        assert capsys.readouterr().err.strip() == "[!] 404: User with ID 9 not found"

    def test_unreachable_server(self, api, capsys):
        api.list_users.return_value = ([], {"status_code": None, "message": "connection refused"})
        assert manage_users.main(["list"], client=api) == 1
        assert capsys.readouterr().err.strip() == "[!] connection refused"
