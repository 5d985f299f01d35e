"""Tests for ManifestAssembler — scanning, progress, certificate, failure policy."""

from __future__ import annotations

import errno
import json
from collections.abc import Callable
from pathlib import Path

import pytest

import artmeta.core.hasher as hasher_module
from artmeta.core.assembler import ManifestAssembler
from artmeta.core.hasher import ContentHasher, hash_bytes
from artmeta.core.progress import CERTIFICATE_ERROR_LABEL, CERTIFICATE_LABEL
from artmeta.models.manifest import Metadata
from artmeta.models.media import MediaDetails


class _FailingHasher(ContentHasher):
    """Raises PermissionError for one file name."""

    def __init__(self, fail_on: str) -> None:
        super().__init__()
        self.fail_on = fail_on

    def hash_file(self, path):
        if Path(path).name == self.fail_on:
            raise PermissionError(13, "Permission denied", str(path))
        return super().hash_file(path)


class _ResolutionEnricher:
    def analyze(self, path: Path) -> MediaDetails:
        return MediaDetails(format="H264", resolution="640x480", duration="1.000")


class _BrokenEnricher:
    def analyze(self, path: Path) -> MediaDetails:
        raise ValueError("cannot parse container")


class TestScan:
    def test_skips_ignored_and_subdirectories(self, make_artwork_dir: Callable[..., Path]):
        directory = make_artwork_dir(
            {
                "a.mp4": b"abcd",
                ".DS_Store": b"junk",
                "Thumbs.db": b"junk",
                "Foo_metadata.json": b"{}",
            },
            certificate="coa.pdf",
        )
        (directory / "extras").mkdir()
        (directory / "extras" / "deep.mp4").write_bytes(b"deep")
        names = [p.name for p in ManifestAssembler().scan(directory)]
        assert names == ["a.mp4"]

    def test_preserves_enumeration_order(self, artwork_dir: Path):
        expected = [p.name for p in artwork_dir.iterdir() if p.is_file()]
        assert [p.name for p in ManifestAssembler().scan(artwork_dir)] == expected

    def test_missing_directory_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ManifestAssembler().scan(tmp_path / "missing")

    def test_non_utf8_name_rejected(self, artwork_dir: Path, write_raw_name):
        write_raw_name(artwork_dir, b"clip\xff.mp4")
        with pytest.raises(OSError) as info:
            ManifestAssembler().scan(artwork_dir)
        assert info.value.errno == errno.EILSEQ
        assert info.value.filename.endswith("clip\\xff.mp4")

    def test_non_utf8_ignored_name_skipped(self, artwork_dir: Path, write_raw_name):
        write_raw_name(artwork_dir, b"old\xff_metadata.json", b"{}")
        assert sorted(p.name for p in ManifestAssembler().scan(artwork_dir)) == ["a.mp4", "b.mp3"]


class TestBuild:
    def test_records_hash_size_format(self, assembler: ManifestAssembler, artwork_dir: Path, template: Metadata):
        manifest = assembler.build(artwork_dir, template)
        by_name = {f.file_name: f for f in manifest.artwork_files}
        assert set(by_name) == {"a.mp4", "b.mp3"}
        assert by_name["a.mp4"].file_hash == hash_bytes(b"abcd")
        assert by_name["b.mp3"].file_hash == hash_bytes(b"wxyz")
        assert by_name["a.mp4"].file_size == 4
        assert by_name["a.mp4"].format == "MP4"
        assert by_name["b.mp3"].format == "MP3"
        assert by_name["a.mp4"].path == "./a.mp4"

    def test_keeps_descriptive_fields(self, assembler: ManifestAssembler, artwork_dir: Path, template: Metadata):
        manifest = assembler.build(artwork_dir, template)
        assert manifest.artwork_title == template.artwork_title
        assert manifest.keywords == template.keywords
        assert manifest.edition_number == 3

    def test_template_files_replaced(self, assembler: ManifestAssembler, artwork_dir: Path, template: Metadata):
        first = assembler.build(artwork_dir, template)
        (artwork_dir / "a.mp4").unlink()
        second = assembler.build(artwork_dir, first)
        assert [f.file_name for f in second.artwork_files] == ["b.mp3"]

    def test_polling_mode_identical(self, assembler: ManifestAssembler, artwork_dir: Path, template: Metadata):
        assert assembler.build(artwork_dir, template, use_polling=True) == assembler.build(
            artwork_dir, template
        )

    def test_empty_directory(self, assembler: ManifestAssembler, make_artwork_dir, template: Metadata):
        manifest = assembler.build(make_artwork_dir({}), template)
        assert manifest.artwork_files == []

    def test_enrichment_fields(self, artwork_dir: Path, template: Metadata):
        manifest = ManifestAssembler(enricher=_ResolutionEnricher()).build(artwork_dir, template)
        assert all(f.resolution == "640x480" for f in manifest.artwork_files)
        assert all(f.format == "H264" for f in manifest.artwork_files)

    def test_enrichment_failure_falls_back(self, artwork_dir: Path, template: Metadata):
        manifest = ManifestAssembler(enricher=_BrokenEnricher()).build(artwork_dir, template)
        assert {f.file_name: f.format for f in manifest.artwork_files} == {"a.mp4": "MP4", "b.mp3": "MP3"}

    def test_unreadable_file_aborts(self, artwork_dir: Path, template: Metadata):
        with pytest.raises(PermissionError):
            ManifestAssembler(hasher=_FailingHasher("b.mp3")).build(artwork_dir, template)

    def test_unreadable_file_aborts_polling(
        self, artwork_dir: Path, template: Metadata, monkeypatch: pytest.MonkeyPatch
    ):
        real_hash_file = hasher_module.hash_file

        def denied(path, chunk_size=hasher_module.CHUNK_SIZE, on_chunk=None):
            if Path(path).name == "b.mp3":
                raise PermissionError(13, "Permission denied", str(path))
            return real_hash_file(path, chunk_size, on_chunk)

        monkeypatch.setattr(hasher_module, "hash_file", denied)
        with pytest.raises(PermissionError):
            ManifestAssembler(poll_interval=0.001).build(artwork_dir, template, use_polling=True)


class TestProgress:
    def test_overall_reaches_one_only_at_end(
        self, artwork_dir: Path, template: Metadata, recorder, progress_log
    ):
        ManifestAssembler(progress=recorder).build(artwork_dir, template)
        overall = [o for _, _, o in progress_log]
        assert overall[-1] == 1.0
        assert all(o < 1.0 for o in overall[:-1])
        assert overall == sorted(overall)

    def test_start_and_completion_per_file(
        self, artwork_dir: Path, template: Metadata, recorder, progress_log
    ):
        ManifestAssembler(progress=recorder).build(artwork_dir, template)
        names = [p.name for p in ManifestAssembler().scan(artwork_dir)]
        assert progress_log == [
            (names[0], 0.0, 0.0),
            (names[0], 1.0, 0.5),
            (names[1], 0.0, 0.5),
            (names[1], 1.0, 1.0),
        ]

    def test_polling_reports_file_fractions(
        self, make_artwork_dir, template: Metadata, recorder, progress_log
    ):
        directory = make_artwork_dir({"long.mov": b"m" * 20000})
        assembler = ManifestAssembler(
            hasher=ContentHasher(chunk_size=8), progress=recorder, poll_interval=0.001
        )
        assembler.build(directory, template, use_polling=True)
        assert progress_log[0] == ("long.mov", 0.0, 0.0)
        assert progress_log[-1] == ("long.mov", 1.0, 1.0)
        assert all(0.0 <= f <= 1.0 for _, f, _ in progress_log)
        assert all(o == 0.0 for _, _, o in progress_log[:-1])

    def test_ignored_files_not_counted(self, make_artwork_dir, template: Metadata, recorder, progress_log):
        directory = make_artwork_dir({"a.mp4": b"a", ".DS_Store": b"x", "Old_metadata.json": b"{}"})
        ManifestAssembler(progress=recorder).build(directory, template)
        assert progress_log[-1] == ("a.mp4", 1.0, 1.0)


class TestCertificate:
    def test_certificate_hashed(
        self, make_artwork_dir, template: Metadata, recorder, progress_log, certificate_bytes: bytes
    ):
        directory = make_artwork_dir({"a.mp4": b"abcd"}, certificate="coa.pdf")
        template = template.model_copy(update={"certificate_of_authenticity": "./certificate/coa.pdf"})
        manifest = ManifestAssembler(progress=recorder).build(directory, template)
        assert manifest.certificate_hash == hash_bytes(certificate_bytes)
        assert progress_log[-1] == (CERTIFICATE_LABEL, 1.0, 1.0)
        assert "coa.pdf" not in [f.file_name for f in manifest.artwork_files]

    def test_missing_certificate_is_not_fatal(
        self, artwork_dir: Path, template: Metadata, recorder, progress_log, caplog
    ):
        template = template.model_copy(update={"certificate_of_authenticity": "./certificate/gone.pdf"})
        with caplog.at_level("WARNING"):
            output = ManifestAssembler(progress=recorder).generate(artwork_dir, template)
        data = json.loads(output.read_text())
        assert data["certificate_of_authenticity"] == "./certificate/gone.pdf"
        assert "certificate_hash" not in data
        assert progress_log[-1] == (CERTIFICATE_ERROR_LABEL, 1.0, 1.0)
        assert "Could not hash certificate" in caplog.text

    def test_stale_certificate_hash_dropped(self, artwork_dir: Path, template: Metadata):
        template = template.model_copy(
            update={
                "certificate_of_authenticity": "./certificate/gone.pdf",
                "certificate_hash": hash_bytes(b"old"),
            }
        )
        assert ManifestAssembler().build(artwork_dir, template).certificate_hash is None


class TestGenerate:
    def test_writes_named_manifest(self, assembler: ManifestAssembler, artwork_dir: Path, template: Metadata):
        output = assembler.generate(artwork_dir, template)
        assert output == artwork_dir / "Night_Garden_metadata.json"
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["artwork_files"]) == 2
        assert {f["file_size"] for f in data["artwork_files"]} == {4}
        assert "certificate_of_authenticity" not in data

    def test_regeneration_excludes_previous_manifest(
        self, assembler: ManifestAssembler, artwork_dir: Path, template: Metadata
    ):
        assembler.generate(artwork_dir, template)
        other = template.model_copy(update={"artwork_title": "Other Title"})
        output = assembler.generate(artwork_dir, other)
        names = [f["file_name"] for f in json.loads(output.read_text())["artwork_files"]]
        assert sorted(names) == ["a.mp4", "b.mp3"]

    def test_overwrites_same_name(self, assembler: ManifestAssembler, artwork_dir: Path, template: Metadata):
        first = assembler.generate(artwork_dir, template)
        (artwork_dir / "c.wav").write_bytes(b"new")
        second = assembler.generate(artwork_dir, template)
        assert first == second
        assert len(json.loads(second.read_text())["artwork_files"]) == 3

    def test_generate_with_polling(self, assembler: ManifestAssembler, artwork_dir: Path, template: Metadata):
        output = assembler.generate_with_polling(artwork_dir, template)
        assert output.exists()

    def test_non_utf8_name_writes_nothing(self, artwork_dir: Path, template: Metadata, write_raw_name):
        write_raw_name(artwork_dir, b"clip\xff.mp4")
        with pytest.raises(OSError):
            ManifestAssembler().generate(artwork_dir, template)
        assert not (artwork_dir / "Night_Garden_metadata.json").exists()

    def test_failure_writes_nothing(self, artwork_dir: Path, template: Metadata):
        with pytest.raises(PermissionError):
            ManifestAssembler(hasher=_FailingHasher("a.mp4")).generate(artwork_dir, template)
        assert not (artwork_dir / "Night_Garden_metadata.json").exists()
