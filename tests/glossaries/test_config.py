"""Unit tests for glossary configuration and storage selection."""

import os

import pytest

from glossaries.config import DEFAULT_ALLOWED_EXTENSIONS, GlossaryConfig, load_glossary_config
from glossaries.storage import LocalGlossaryStorage, S3GlossaryStorage, get_glossary_storage
from glossaries.storage.keys import normalize_object_key, unique_object_key

ENV_VARS = [
    "GLOSSARY_STORAGE_TYPE",
    "GLOSSARY_ALLOWED_EXTENSIONS",
    "GLOSSARY_S3_ENDPOINT_URL",
    "GLOSSARY_LOCAL_ROOT",
    "GLOSSARY_SIGNING_KEY",
    "GLOSSARY_SIGNED_URI_HOURS",
    "GLOSSARY_MAX_CONCURRENT_UPLOADS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's environment and any .env file"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestLoadGlossaryConfig:

    def test_defaults(self):
        config = load_glossary_config()

        assert config.is_local_mode
        assert config.allowed_extensions == DEFAULT_ALLOWED_EXTENSIONS
        assert config.signed_uri_hours == 5
        assert config.max_concurrent_uploads == 10

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GLOSSARY_STORAGE_TYPE", "S3")
        monkeypatch.setenv("GLOSSARY_ALLOWED_EXTENSIONS", ".csv, .tsv,")
        monkeypatch.setenv("AWS_REGION", "eu-central-1")
        monkeypatch.setenv("GLOSSARY_MAX_CONCURRENT_UPLOADS", "4")

        config = load_glossary_config()

        assert config.is_cloud_mode
        assert config.allowed_extensions == [".csv", ".tsv"]
        assert config.region == "eu-central-1"
        assert config.max_concurrent_uploads == 4

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("GLOSSARY_SIGNED_URI_HOURS=3\n")

        try:
            config = load_glossary_config()
        finally:
            # load_dotenv writes straight into os.environ
            os.environ.pop("GLOSSARY_SIGNED_URI_HOURS", None)

        assert config.signed_uri_hours == 3

    def test_invalid_storage_type(self, monkeypatch):
        monkeypatch.setenv("GLOSSARY_STORAGE_TYPE", "ftp")
        with pytest.raises(ValueError):
            load_glossary_config()

    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("GLOSSARY_SIGNED_URI_HOURS", "five")
        with pytest.raises(ValueError):
            load_glossary_config()

    def test_cap_must_be_positive(self):
        with pytest.raises(ValueError):
            GlossaryConfig(max_concurrent_uploads=0)


class TestGetGlossaryStorage:

    def test_local_backend(self, tmp_path):
        storage = get_glossary_storage(GlossaryConfig(local_root=str(tmp_path)))
        assert isinstance(storage, LocalGlossaryStorage)
        assert storage.root == tmp_path

    def test_s3_backend(self, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
        storage = get_glossary_storage(GlossaryConfig(storage_type="s3", region="eu-west-1"))
        assert isinstance(storage, S3GlossaryStorage)
        assert storage.region == "eu-west-1"


class TestNormalizeObjectKey:

    @pytest.mark.parametrize("path,expected", [
        ("/data/glossaries/de en.csv", "data_glossaries_de_en.csv"),
        ("C:\\Users\\me\\terms.tsv", "C_Users_me_terms.tsv"),
        ("plain.csv", "plain.csv"),
        ("dir//nested/(v2) terms#1.csv", "dir_nested_(v2)_terms_1.csv"),
    ])
    def test_normalization(self, path, expected):
        assert normalize_object_key(path) == expected

    def test_same_name_in_different_directories_stays_distinct(self):
        assert normalize_object_key("/a/terms.csv") != normalize_object_key("/b/terms.csv")

    def test_unusable_path(self):
        with pytest.raises(ValueError):
            normalize_object_key("///")

    def test_unique_key_is_plain_when_free(self):
        used = set()
        assert unique_object_key("/data/a b.csv", used) == "data_a_b.csv"
        assert used == {"data_a_b.csv"}

    def test_unique_key_disambiguates_clashes(self):
        used = set()
        first = unique_object_key("/data/a b.csv", used)
        second = unique_object_key("/data/a_b.csv", used)
        third = unique_object_key("/data/a:b.csv", used)

        assert len({first, second, third}) == 3
        assert second.startswith("data_a_b-") and second.endswith(".csv")
        assert used == {first, second, third}

    def test_unique_key_survives_hash_clash(self):
        used = set()
        unique_object_key("/data/a_b.csv", used)
        clashing = unique_object_key("/data/a b.csv", used)
        # Base and hashed key are both taken now
        again = unique_object_key("/data/a b.csv", used)
        assert again not in (clashing, "data_a_b.csv")
        assert again.endswith("-1.csv")
