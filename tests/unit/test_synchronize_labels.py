"""Contains unit tests for label reconciliation."""

from types import SimpleNamespace
from typing import Any

import pytest

from issue_sync.synchronize.exceptions import EnsureLabelsError
from issue_sync.synchronize.labels import LabelReconciler, label_color, label_description


@pytest.mark.parametrize(
    "label, expected",
    [
        pytest.param(SimpleNamespace(name="bug", color="ff0000"), "ff0000", id="object color"),
        pytest.param(SimpleNamespace(name="bug", color="#ff0000"), "ff0000", id="leading hash stripped"),
        pytest.param(SimpleNamespace(name="bug", color=None), "CCCCCC", id="missing color"),
        pytest.param({"name": "bug", "color": "00ff00"}, "00ff00", id="dict color"),
        pytest.param("bug", "CCCCCC", id="plain string"),
    ],
)
def test_label_color(label: Any, expected: str) -> None:
    """Test the color used when copying a label."""
    assert label_color(label) == expected


def test_label_description_defaults_to_empty() -> None:
    """Test that a missing description becomes an empty string."""
    assert label_description(SimpleNamespace(name="bug", description=None)) == ""
    assert label_description({"name": "bug", "description": "Something broke"}) == "Something broke"


@pytest.mark.asyncio
async def test_ensure_labels_creates_only_missing_labels(fake_adapter: Any) -> None:
    """Test that labels already in the target are left alone."""
    fake_adapter.add_label("octo", "target", "bug", color="000000", description="existing")
    reconciler = LabelReconciler(fake_adapter)
    source_labels = [
        SimpleNamespace(name="bug", color="ff0000", description="new description"),
        SimpleNamespace(name="urgent", color="ffff00", description=None),
    ]

    created = await reconciler.ensure_labels("octo", "target", source_labels)

    assert [label.name for label in created] == ["urgent"]
    assert fake_adapter.calls_named("create_label") == [("create_label", "octo", "target", "urgent", "ffff00", "")]
    existing = fake_adapter.labels[("octo", "target")][0]
    assert (existing.color, existing.description) == ("000000", "existing")


@pytest.mark.asyncio
async def test_ensure_labels_matches_names_case_sensitively(fake_adapter: Any) -> None:
    """Test that 'Bug' in the target does not satisfy 'bug'."""
    fake_adapter.add_label("octo", "target", "Bug")
    reconciler = LabelReconciler(fake_adapter)

    created = await reconciler.ensure_labels("octo", "target", [SimpleNamespace(name="bug", color="ff0000", description=None)])

    assert [label.name for label in created] == ["bug"]


@pytest.mark.asyncio
async def test_ensure_labels_lists_every_page(fake_adapter: Any) -> None:
    """Test that a label on a later page of the target is found."""
    for index in range(5):
        fake_adapter.add_label("octo", "target", f"label-{index}")
    reconciler = LabelReconciler(fake_adapter, per_page=2)

    created = await reconciler.ensure_labels("octo", "target", [SimpleNamespace(name="label-4", color="ff0000", description=None)])

    assert created == []
    assert [call[3] for call in fake_adapter.calls_named("list_labels_page")] == [1, 2, 3]


@pytest.mark.asyncio
async def test_ensure_labels_is_idempotent(fake_adapter: Any) -> None:
    """Test that re-running after success creates nothing new, even with a fresh reconciler."""
    source_labels = [SimpleNamespace(name="bug", color="ff0000", description=None)]
    await LabelReconciler(fake_adapter).ensure_labels("octo", "target", source_labels)

    created = await LabelReconciler(fake_adapter).ensure_labels("octo", "target", source_labels)

    assert created == []
    assert len(fake_adapter.calls_named("create_label")) == 1


@pytest.mark.asyncio
async def test_ensure_labels_creates_repeated_names_once(fake_adapter: Any) -> None:
    """Test that a label listed twice in the input is created once."""
    reconciler = LabelReconciler(fake_adapter)

    await reconciler.ensure_labels("octo", "target", ["bug", {"name": "bug", "color": "ff0000"}])

    assert fake_adapter.calls_named("create_label") == [("create_label", "octo", "target", "bug", "CCCCCC", "")]


@pytest.mark.asyncio
async def test_ensure_labels_remembers_target_labels(fake_adapter: Any) -> None:
    """Test that target labels are listed once per reconciler until forgotten."""
    reconciler = LabelReconciler(fake_adapter)

    await reconciler.ensure_labels("octo", "target", ["bug"])
    await reconciler.ensure_labels("octo", "target", ["bug", "docs"])
    assert len(fake_adapter.calls_named("list_labels_page")) == 1
    assert [call[3] for call in fake_adapter.calls_named("create_label")] == ["bug", "docs"]

    reconciler.forget()
    await reconciler.ensure_labels("octo", "target", ["bug"])
    assert len(fake_adapter.calls_named("list_labels_page")) == 2


@pytest.mark.asyncio
async def test_ensure_labels_reports_failing_label(fake_adapter: Any) -> None:
    """Test that a failed creation names the label and keeps the cause."""
    cause = ValueError("GitHub 422 error in create_label: Validation Failed")
    fake_adapter.fail_on["create_label"] = cause
    fake_adapter.fail_after["create_label"] = 1
    reconciler = LabelReconciler(fake_adapter)

    with pytest.raises(EnsureLabelsError) as exc_info:
        await reconciler.ensure_labels("octo", "target", ["bug", "docs"])

    assert exc_info.value.label_name == "docs"
    assert (exc_info.value.owner, exc_info.value.repo) == ("octo", "target")
    assert exc_info.value.cause is cause

    # The label that was created is remembered, so a retry only creates what is missing.
    fake_adapter.fail_on.clear()
    created = await reconciler.ensure_labels("octo", "target", ["bug", "docs"])
    assert [label.name for label in created] == ["docs"]


@pytest.mark.asyncio
async def test_ensure_labels_reports_listing_failure(fake_adapter: Any) -> None:
    """Test that a failure listing target labels is reported without a label name."""
    fake_adapter.fail_on["list_labels_page"] = ConnectionError("boom")
    reconciler = LabelReconciler(fake_adapter)

    with pytest.raises(EnsureLabelsError) as exc_info:
        await reconciler.ensure_labels("octo", "target", ["bug"])

    assert exc_info.value.label_name is None
    assert "Error listing labels in octo/target" in str(exc_info.value)
