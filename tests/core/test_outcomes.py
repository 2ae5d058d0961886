"""Workflow Outcomes: link status derivation and JSON shapes."""

from uuid import uuid4

from wardrobe_api.core.domain_types import LinkStatus
from wardrobe_api.core.outcomes import (
    PARTIAL_WORKFLOW_FAILURE, BootstrapResult, DeletedDocument, LinkOutcome,
    WardrobeContents,
)


def test_all_links_made_is_linked():
    """Every link made → LINKED, no warning."""
    outcome = LinkOutcome.from_attempts([uuid4(), uuid4()], [], [])
    assert outcome.status is LinkStatus.LINKED
    assert outcome.warning is None
    assert outcome.error is None


def test_some_links_failed_is_partial():
    """Mixed results → PARTIAL with the workflow warning."""
    failed = uuid4()
    outcome = LinkOutcome.from_attempts([uuid4()], [failed], ["boom"])
    assert outcome.status is LinkStatus.PARTIAL
    assert outcome.warning == PARTIAL_WORKFLOW_FAILURE
    assert outcome.to_dict()["failed_wardrobe_ids"] == [str(failed)]


def test_no_links_made_is_failed():
    """No link made → FAILED, errors joined."""
    outcome = LinkOutcome.from_attempts([], [uuid4()], ["a", "b"])
    assert outcome.status is LinkStatus.FAILED
    assert outcome.error == "a; b"


def test_bootstrap_result_serializes_ids():
    """Bootstrap ids serialize as strings."""
    ids = [uuid4() for _ in range(4)]
    body = BootstrapResult(*ids).to_dict()
    assert body == {
        "user_id": str(ids[0]),
        "dresses_wardrobe_id": str(ids[1]),
        "outfits_wardrobe_id": str(ids[2]),
        "favorites_wardrobe_id": str(ids[3]),
    }


def test_deleted_document_with_cleanup_error_warns():
    """Cleanup error → incomplete, warning set."""
    deleted = DeletedDocument({"id": "d1"}, None, "connection lost")
    assert not deleted.cleanup_complete
    assert deleted.to_dict()["warning"] == PARTIAL_WORKFLOW_FAILURE
    assert deleted.to_dict()["links_removed"] is None


def test_deleted_document_clean():
    """Clean delete carries no warning."""
    body = DeletedDocument({"id": "d1"}, 2).to_dict()
    assert body["cleanup_complete"] is True
    assert body["warning"] is None


def test_wardrobe_contents_reports_stale_ids():
    """Stale document ids are listed beside the documents."""
    wardrobe_id = uuid4()
    body = WardrobeContents(wardrobe_id, [{"id": "a"}], ["gone"]).to_dict()
    assert body["wardrobe_id"] == str(wardrobe_id)
    assert body["stale_document_ids"] == ["gone"]
