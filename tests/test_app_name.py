import pytest

from nanocode.app_name import get_app_name, is_valid_app_name, set_app_name


@pytest.fixture(autouse=True)
def _reset_app_name():
    set_app_name("coding")
    yield
    set_app_name("coding")


@pytest.mark.parametrize("name", ["coding", "my-app", "my_app", "my.app", "app123"])
def test_valid_app_names(name):
    assert is_valid_app_name(name) is True


@pytest.mark.parametrize(
    "name", ["", ".", "..", "app/name", "app\\name", "app name", "app@name"]
)
def test_invalid_app_names(name):
    assert is_valid_app_name(name) is False


def test_non_ascii_letters_rejected():
    assert is_valid_app_name("appé") is False


def test_set_app_name():
    set_app_name("test-app")
    assert get_app_name() == "test-app"

    set_app_name("..")
    assert get_app_name() == "coding"


def test_default_is_coding():
    assert get_app_name() == "coding"