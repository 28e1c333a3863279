import pytest

from onlyus.config import Settings
from onlyus.deep_links import DeepLink, parse_deep_link

SETTINGS = Settings()


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://onlyus.app", DeepLink("/")),
        ("https://onlyus.app/", DeepLink("/")),
        ("https://www.onlyus.app/profile", DeepLink("/profile")),
        ("https://onlyus.app/invite?code=ABC123", DeepLink("/invite", {"code": "ABC123"})),
        ("onlyus://invite?code=ABC123", DeepLink("/invite", {"code": "ABC123"})),
        ("onlyus://chat/42/", DeepLink("/chat/42")),
        ("onlyus://", DeepLink("/")),
        ("ONLYUS://profile", DeepLink("/profile")),
    ],
)
def test_supported_links_resolve(url, expected):
    assert parse_deep_link(url, settings=SETTINGS) == expected


@pytest.mark.parametrize(
    "url",
    ["", "   ", "https://example.com/invite", "mailto:support@onlyus.app", "ftp://onlyus.app/file"],
)
def test_foreign_links_are_ignored(url):
    assert parse_deep_link(url, settings=SETTINGS) is None


def test_custom_host_and_scheme_come_from_settings():
    custom = Settings(ONLYUS_DEEP_LINK_HOST="staging.onlyus.app", ONLYUS_DEEP_LINK_SCHEME="onlyus-staging")

    assert parse_deep_link("https://staging.onlyus.app/x", settings=custom) == DeepLink("/x")
    assert parse_deep_link("onlyus-staging://x", settings=custom) == DeepLink("/x")
    assert parse_deep_link("https://onlyus.app/x", settings=custom) is None
