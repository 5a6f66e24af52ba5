import io

import pytest
from rich.console import Console

import releasekit.uploader as uploader_module
from releasekit.errors import ReleaseError
from releasekit.models import UploadConfiguration, UploadResult
from releasekit.uploader import ReleaseUploader


class FakePublisher:
    def __init__(self, fail_on=None, version_code=1234):
        self.calls = []
        self.fail_on = fail_on
        self.version_code = version_code

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name == self.fail_on:
            raise ReleaseError(
                f"Play Store call '{name}' failed",
                payload={"error": {"code": 400, "message": "Track is invalid"}},
            )

    def insert_edit(self):
        self._record("create_edit")
        return "edit-42"

    def upload_bundle(self, edit_id, payload):
        self._record("upload_bundle", edit_id, payload)
        return self.version_code

    def update_track(self, edit_id, track, releases):
        self._record("update_track", edit_id, track, releases)
        return {}

    def commit_edit(self, edit_id):
        self._record("commit_edit", edit_id)
        return {}


class RecordingFactory:
    def __init__(self, publisher):
        self.publisher = publisher
        self.calls = 0

    def __call__(self, config):
        self.calls += 1
        return self.publisher


@pytest.fixture
def release_files(tmp_path):
    bundle = tmp_path / "build" / "app.aab"
    bundle.parent.mkdir()
    bundle.write_bytes(b"PK\x03\x04aab")
    key = tmp_path / "service-account.json"
    key.write_text('{"client_email": "x", "private_key": "y"}', encoding="utf-8")
    return bundle, key


def build_config(bundle, key, track="production"):
    return UploadConfiguration(
        package_name="com.elmosfurniture.app",
        bundle_path=str(bundle),
        service_account_key_path=str(key),
        track=track,
        release_notes={"en-US": "Bug fixes"},
    )


def test_upload_runs_edit_sequence_in_order(release_files):
    bundle, key = release_files
    publisher = FakePublisher()
    uploader = ReleaseUploader(build_config(bundle, key), publisher_factory=RecordingFactory(publisher))

    result = uploader.upload()

    assert result == UploadResult(edit_id="edit-42", version_code=1234, track="production")
    assert publisher.calls == [
        ("create_edit",),
        ("upload_bundle", "edit-42", b"PK\x03\x04aab"),
        (
            "update_track",
            "edit-42",
            "production",
            [
                {
                    "versionCodes": [1234],
                    "status": "completed",
                    "releaseNotes": [{"language": "en-US", "text": "Bug fixes"}],
                }
            ],
        ),
        ("commit_edit", "edit-42"),
    ]


def test_run_returns_zero_on_success(release_files):
    bundle, key = release_files
    uploader = ReleaseUploader(
        build_config(bundle, key, track="beta"),
        publisher_factory=RecordingFactory(FakePublisher()),
    )

    assert uploader.run() == 0


def test_missing_bundle_fails_before_any_remote_call(release_files, tmp_path):
    _, key = release_files
    factory = RecordingFactory(FakePublisher())
    uploader = ReleaseUploader(build_config(tmp_path / "missing.aab", key), publisher_factory=factory)

    assert uploader.run() == 1
    assert factory.calls == 0
    assert factory.publisher.calls == []


def test_missing_credentials_fail_before_authentication(release_files, tmp_path):
    bundle, _ = release_files
    factory = RecordingFactory(FakePublisher())
    uploader = ReleaseUploader(
        build_config(bundle, tmp_path / "missing-key.json"),
        publisher_factory=factory,
    )

    with pytest.raises(ReleaseError, match="Service account key file not found"):
        uploader.check_preconditions()
    assert uploader.run() == 1
    assert factory.calls == 0


def test_track_update_failure_skips_commit(release_files):
    bundle, key = release_files
    publisher = FakePublisher(fail_on="update_track")
    uploader = ReleaseUploader(build_config(bundle, key), publisher_factory=RecordingFactory(publisher))

    assert uploader.run() == 1
    assert [call[0] for call in publisher.calls] == ["create_edit", "upload_bundle", "update_track"]
    assert uploader.current_step_name == "update_track"


def test_unexpected_errors_exit_with_failure(release_files):
    bundle, key = release_files

    def broken_factory(config):
        raise ValueError("boom")

    uploader = ReleaseUploader(build_config(bundle, key), publisher_factory=broken_factory)

    assert uploader.run() == 1


class BracketPayloadPublisher(FakePublisher):
    def __init__(self, payload):
        super().__init__()
        self.payload = payload

    def insert_edit(self):
        raise ReleaseError("Play Store call 'edits.insert' failed", payload=self.payload)


@pytest.mark.parametrize(
    "payload",
    ["proxy said [/oops] bad gateway", "quota [limit] exceeded"],
)
def test_run_prints_non_json_payload_verbatim(release_files, monkeypatch, payload):
    bundle, key = release_files
    recorded = Console(file=io.StringIO(), record=True, width=200)
    monkeypatch.setattr(uploader_module, "console", recorded)
    uploader = ReleaseUploader(
        build_config(bundle, key),
        publisher_factory=RecordingFactory(BracketPayloadPublisher(payload)),
    )

    assert uploader.run() == 1
    assert payload in recorded.export_text()


def test_unexpected_error_text_is_printed_verbatim(release_files, monkeypatch):
    bundle, key = release_files
    recorded = Console(file=io.StringIO(), record=True, width=200)
    monkeypatch.setattr(uploader_module, "console", recorded)

    def broken_factory(config):
        raise ValueError("bad [/tag] in key")

    uploader = ReleaseUploader(build_config(bundle, key), publisher_factory=broken_factory)

    assert uploader.run() == 1
    assert "bad [/tag] in key" in recorded.export_text()
