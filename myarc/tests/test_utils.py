import pytest
from cryptography.fernet import Fernet

from myarc.core.utils.encryption import CipherError, EntryCipher
from myarc.core.utils.pagination import paginate_items
from myarc.core.utils.storage import ObjectStorage, extract_upload_keys
from myarc.core.utils.text import make_preview, normalize_tags, strip_html

pytestmark = pytest.mark.unit


def test_strip_html_and_preview():
    html = "<h1>Title</h1><p>Line&nbsp;one<br/>line two</p>"
    assert strip_html(html) == "Title Line one line two"
    assert make_preview("<p>" + "word " * 100 + "</p>", max_chars=20) == "word word word wo..."


def test_normalize_tags_merges_case_insensitively():
    assert normalize_tags(["Run", "sleep"], ["run", " Focus ", "", None]) == ["Run", "sleep", "Focus"]


def test_cipher_round_trip_and_bad_token():
    cipher = EntryCipher(Fernet.generate_key().decode())
    token = cipher.encrypt("dear diary")
    assert token != "dear diary"
    assert cipher.decrypt(token) == "dear diary"
    with pytest.raises(CipherError):
        cipher.decrypt("not-a-token")


def test_disabled_cipher_passes_plaintext_through():
    cipher = EntryCipher(None)
    assert cipher.enabled is False
    assert cipher.encrypt("hello") == "hello"


@pytest.mark.parametrize(
    "page, per_page, expected, has_more",
    [(1, 2, [0, 1], True), (2, 2, [2, 3], True), (3, 2, [4], False), (4, 2, [], False)],
)
def test_paginate_items(page, per_page, expected, has_more):
    result = paginate_items(list(range(5)), page, per_page)
    assert result["items"] == expected
    assert result["total"] == 5
    assert result["has_more"] is has_more


def test_storage_keys(tmp_path):
    storage = ObjectStorage(str(tmp_path))
    (tmp_path / "photo.png").write_bytes(b"x")
    assert storage.delete("photo.png") is True
    assert storage.delete("photo.png") is False
    with pytest.raises(ValueError, match="invalid_key"):
        storage.delete("../etc/passwd")
    assert extract_upload_keys('<img src="/uploads/a.png"><img src="/uploads/a.png"><a href="/uploads/b.pdf">') == [
        "a.png",
        "b.pdf",
    ]
