import pytest

from furigana_service.config import HistoryConfig
from furigana_service.errors import UpstreamError
from furigana_service.history.backends import InMemoryKeyValueBackend
from furigana_service.history.store import SerializedHistoryStore
from furigana_service.history.workspace import AnnotationWorkspace, display_label
from furigana_service.types import AnnotationResult, HistoryEntry, RawHtml


class _StubClient:
    def __init__(self, html: str) -> None:
        self.html = html
        self.texts: list[str] = []

    def annotate(self, text: str) -> AnnotationResult:
        self.texts.append(text)
        return AnnotationResult(html=RawHtml(self.html))


class _BrokenClient:
    def annotate(self, text: str) -> AnnotationResult:
        raise UpstreamError("upstream down")


def _workspace(client: object) -> AnnotationWorkspace:
    return AnnotationWorkspace(
        client=client,
        store=SerializedHistoryStore(InMemoryKeyValueBackend()),
    )


def test_submit_sanitizes_and_stores_entry() -> None:
    client = _StubClient('<ruby><i>食</i><rt>た</rt></ruby>べる<script>x()</script>')
    workspace = _workspace(client)

    entry = workspace.submit("  食べる \n")

    assert client.texts == ["食べる"]
    assert entry.original_text == "食べる"
    assert entry.html == "<ruby>食<rt>た</rt></ruby>べる&lt;script&gt;x()&lt;/script&gt;"
    assert entry.created_at > 0
    assert workspace.entries() == [entry]
    assert workspace.get(entry.id) == entry


def test_submit_assigns_unique_ids() -> None:
    workspace = _workspace(_StubClient("本"))

    first = workspace.submit("本")
    second = workspace.submit("本")

    assert first.id != second.id
    assert [entry.id for entry in workspace.entries()] == [second.id, first.id]


def test_failed_submission_stores_nothing() -> None:
    workspace = _workspace(_BrokenClient())

    with pytest.raises(UpstreamError):
        workspace.submit("本")

    assert workspace.entries() == []


def test_rename_and_clear_name() -> None:
    workspace = _workspace(_StubClient("本"))
    entry = workspace.submit("本を読む")

    workspace.rename(entry.id, "  Reading  ")
    assert workspace.get(entry.id).name == "Reading"

    workspace.rename(entry.id, "   ")
    assert workspace.get(entry.id).name is None


def test_delete_removes_entry() -> None:
    workspace = _workspace(_StubClient("本"))
    entry = workspace.submit("本")

    workspace.delete(entry.id)

    assert workspace.entries() == []
    assert workspace.get(entry.id) is None


def test_display_label_prefers_name_and_truncates() -> None:
    entry = HistoryEntry(id="1", original_text="あ" * 50, html="", created_at=1)

    assert display_label(entry) == "あ" * 40 + "…"
    assert display_label(entry.model_copy(update={"name": " 名前 "})) == "名前"

    workspace = AnnotationWorkspace(
        client=_StubClient(""),
        store=SerializedHistoryStore(InMemoryKeyValueBackend()),
        config=HistoryConfig(label_length=3),
    )
    assert workspace.display_label(entry) == "あああ…"


def test_package_exports_history_workflow() -> None:
    import furigana_service

    workspace = furigana_service.AnnotationWorkspace(
        client=_StubClient("<ruby>本<rt>ほん</rt></ruby>"),
        store=furigana_service.SerializedHistoryStore(furigana_service.InMemoryKeyValueBackend()),
    )

    entry = workspace.submit("\ufeff本")

    assert entry.original_text == "本"
    assert furigana_service.SqliteKeyValueBackend is not None
