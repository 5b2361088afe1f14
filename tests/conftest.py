"""Shared fixtures for transcript extraction tests."""

import sys
from pathlib import Path

import orjson
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def segment(text):
    return {"transcriptSegmentRenderer": {"snippet": {"runs": [{"text": text}]}}}


def envelope(segments):
    """Wrap *segments* in the engagement-panel structure the extractor expects."""
    return {
        "actions": [
            {
                "updateEngagementPanelAction": {
                    "content": {
                        "transcriptRenderer": {
                            "content": {
                                "transcriptSearchPanelRenderer": {
                                    "body": {
                                        "transcriptSegmentListRenderer": {
                                            "initialSegments": segments,
                                        }
                                    }
                                }
                            }
                        }
                    }
                }
            }
        ]
    }


@pytest.fixture
def hello_world_json():
    return envelope([segment("Hello"), segment("world")])


@pytest.fixture
def write_json(tmp_path):
    def _write(data, name="transcript.json"):
        path = tmp_path / name
        path.write_bytes(orjson.dumps(data))
        return path

    return _write
