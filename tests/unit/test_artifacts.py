"""
Unit tests for ArtifactAccumulator.
"""
import pytest

from process_library.core.artifacts import ArtifactAccumulator
from process_library.core.exceptions import ValidationError
from process_library.core.models import Artifact


class TestArtifactAccumulator:
    """Test artifact collection."""

    def test_starts_empty(self):
        artifacts = ArtifactAccumulator()

        assert len(artifacts) == 0
        assert artifacts.as_files() == []

    def test_collect_preserves_order(self):
        """Test that artifacts keep the order of the producing steps."""
        artifacts = ArtifactAccumulator()
        artifacts.collect({"artifacts": [{"path": "a.md"}, {"path": "b.json", "format": "json"}]})
        artifacts.collect({"artifacts": [{"path": "c.md", "label": "Charter"}]})

        assert [a.path for a in artifacts] == ["a.md", "b.json", "c.md"]
        assert artifacts[1].format == "json"
        assert artifacts[2].label == "Charter"

    def test_missing_artifacts_list_is_empty(self):
        artifacts = ArtifactAccumulator()
        artifacts.collect({"summary": "no files"})
        artifacts.collect({"artifacts": None})

        assert len(artifacts) == 0

    def test_no_deduplication(self):
        artifacts = ArtifactAccumulator()
        artifacts.append({"path": "report.md"})
        artifacts.append({"path": "report.md"})

        assert len(artifacts) == 2

    def test_format_defaults_to_markdown(self):
        artifacts = ArtifactAccumulator()
        artifacts.append({"path": "notes.md"})

        assert artifacts.as_files() == [{"path": "notes.md", "format": "markdown"}]

    def test_files_payload_omits_empty_keys(self):
        artifacts = ArtifactAccumulator()
        artifacts.append(Artifact(path="src/app.py", format="code", language="python"))

        assert artifacts.as_files() == [{"path": "src/app.py", "format": "code", "language": "python"}]

    def test_entry_without_path_rejected(self):
        artifacts = ArtifactAccumulator()

        with pytest.raises(ValidationError):
            artifacts.append({"format": "markdown"})

    def test_iteration_is_a_snapshot(self):
        """Test that appending while iterating does not affect the iteration."""
        artifacts = ArtifactAccumulator()
        artifacts.append({"path": "a.md"})

        seen = []
        for artifact in artifacts:
            seen.append(artifact.path)
            artifacts.append({"path": "b.md"})

        assert seen == ["a.md"]
        assert len(artifacts) == 2
