"""
Tests unitaires pour la mémoire de traduction.

Ces tests vérifient le chargement, l'insertion sans écrasement et la
sauvegarde idempotente de la mémoire sur disque.
"""

import json

import pytest

from caption_translator.exceptions import CorruptStoreError
from caption_translator.memory import TranslationMemory


def write_rows(path, rows):
    path.write_text(json.dumps(rows, ensure_ascii=False), encoding="utf-8")


class TestLoad:
    """Tests de chargement."""

    def test_missing_file_gives_empty_memory(self, tmp_path):
        memory = TranslationMemory.load(tmp_path / "absent.json")

        assert len(memory) == 0
        assert memory.loaded_count == 0
        assert not (tmp_path / "absent.json").exists()

    def test_load_rows(self, tmp_path):
        path = tmp_path / "dictionary.json"
        write_rows(path, [{"Key": "Customer", "Value": "Debitor"}, {"Key": "Item", "Value": "Artikel"}])

        memory = TranslationMemory.load(path)

        assert memory.lookup("Customer") == "Debitor"
        assert memory.lookup("Item") == "Artikel"
        assert memory.loaded_count == 2

    @pytest.mark.parametrize(
        "rows",
        [
            [{"Key": "Customer"}],
            [{"Value": "Debitor"}],
            [{"Key": "", "Value": "Debitor"}],
            [{"Key": "Customer", "Value": ""}],
            ["Customer"],
        ],
    )
    def test_row_missing_column_is_corrupt(self, tmp_path, rows):
        path = tmp_path / "dictionary.json"
        write_rows(path, [{"Key": "Item", "Value": "Artikel"}] + rows)

        with pytest.raises(CorruptStoreError) as exc_info:
            TranslationMemory.load(path)

        assert exc_info.value.row == 1
        assert exc_info.value.path == path

    def test_invalid_json_is_corrupt(self, tmp_path):
        path = tmp_path / "dictionary.json"
        path.write_text("{ invalid json", encoding="utf-8")

        with pytest.raises(CorruptStoreError) as exc_info:
            TranslationMemory.load(path)

        assert exc_info.value.row is None

    def test_document_must_be_a_list(self, tmp_path):
        path = tmp_path / "dictionary.json"
        path.write_text('{"Customer": "Debitor"}', encoding="utf-8")

        with pytest.raises(CorruptStoreError):
            TranslationMemory.load(path)


class TestLookupInsert:
    """Tests de recherche et d'insertion."""

    def test_lookup_is_case_sensitive(self):
        memory = TranslationMemory({"Customer": "Debitor"})

        assert memory.lookup("Customer") == "Debitor"
        assert memory.lookup("customer") is None

    def test_insert_new_entry(self):
        memory = TranslationMemory()

        assert memory.insert("Customer", "Kunde") is True
        assert memory.lookup("Customer") == "Kunde"
        assert "Customer" in memory

    def test_first_insert_wins(self):
        memory = TranslationMemory()
        memory.insert("Customer", "Kunde")

        assert memory.insert("Customer", "Debitor") is False
        assert memory.lookup("Customer") == "Kunde"
        assert len(memory) == 1

    def test_existing_entry_never_overwritten(self):
        memory = TranslationMemory({"Customer": "Debitor"})

        memory.insert("Customer", "Kunde")

        assert memory.lookup("Customer") == "Debitor"

    def test_empty_values_not_stored(self):
        memory = TranslationMemory()

        assert memory.insert("Customer", "") is False
        assert memory.insert("", "Kunde") is False
        assert len(memory) == 0


class TestSave:
    """Tests de sauvegarde."""

    def test_save_sorted_by_key(self, tmp_path):
        path = tmp_path / "dictionary.json"
        memory = TranslationMemory.load(path)
        memory.insert("Vendor", "Kreditor")
        memory.insert("Customer", "Debitor")
        memory.insert("Item", "Artikel")

        assert memory.save() is True

        rows = json.loads(path.read_text(encoding="utf-8"))
        assert [row["Key"] for row in rows] == ["Customer", "Item", "Vendor"]
        assert rows[0] == {"Key": "Customer", "Value": "Debitor"}

    def test_save_keeps_unicode(self, tmp_path):
        path = tmp_path / "dictionary.json"
        memory = TranslationMemory.load(path)
        memory.insert("Blocked", "Gesperrt für Lieferung")
        memory.save()

        assert "für" in path.read_text(encoding="utf-8")

    def test_unchanged_memory_is_not_written(self, tmp_path):
        """Une mémoire inchangée ne réécrit pas le fichier."""
        path = tmp_path / "dictionary.json"
        content = '[{"Value": "Debitor", "Key": "Customer"}]'
        path.write_text(content, encoding="utf-8")
        mtime = path.stat().st_mtime_ns

        memory = TranslationMemory.load(path)
        memory.insert("Customer", "Kunde")

        assert memory.save() is False
        assert path.read_text(encoding="utf-8") == content
        assert path.stat().st_mtime_ns == mtime

    def test_empty_memory_without_file_not_written(self, tmp_path):
        path = tmp_path / "dictionary.json"
        memory = TranslationMemory.load(path)

        assert memory.save() is False
        assert not path.exists()

    def test_save_then_reload(self, tmp_path):
        path = tmp_path / "sub" / "dictionary.json"
        memory = TranslationMemory.load(path)
        memory.insert("Customer", "Kunde")
        memory.save()

        reloaded = TranslationMemory.load(path)

        assert reloaded.items() == [("Customer", "Kunde")]
        assert reloaded.loaded_count == 1

    def test_second_save_is_noop(self, tmp_path):
        path = tmp_path / "dictionary.json"
        memory = TranslationMemory.load(path)
        memory.insert("Customer", "Kunde")

        assert memory.save() is True
        assert memory.save() is False

    def test_save_without_path_raises(self):
        memory = TranslationMemory()
        memory.insert("Customer", "Kunde")

        with pytest.raises(ValueError):
            memory.save()
