"""Shared fixtures for schema service tests."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from schema_svc.api import routes
from schema_svc.catalog.loader import load_catalog
from schema_svc.catalog.registry import SchemaCatalog
from schema_svc.main import app
from schema_svc.views.composer import ViewComposer

REPO_ROOT = Path(__file__).parent.parent


def _links(*types: str) -> list[dict]:
    return [{"group": "object", "type": t, "caption": t.title()} for t in types]


# =============================================================================
# Catalog Fixtures
# =============================================================================

@pytest.fixture
def schema_data() -> dict:
    """Small schema: process -> user -> group, plus profile and extension entries."""
    return {
        "version": "1.0.0-test",
        "types": {"string_t": {"caption": "String"}},
        "extensions": {
            "dev": {"uid": 999, "caption": "Development", "version": "0.1.0"},
        },
        "profiles": {
            "host": {"caption": "Host", "attributes": ["device"]},
            "debug": {"extension": "dev", "caption": "Debug", "attributes": ["trace"]},
        },
        "categories": {
            "system": {"uid": 1, "caption": "System Activity", "_links": _links("base_event")},
            "iam": {"uid": 3, "caption": "Identity & Access Management"},
        },
        "dictionary": {
            "attributes": {
                "name": {"type": "string_t", "caption": "Name", "_links": _links("user", "group")},
                "pid": {"type": "integer_t", "caption": "Process ID"},
                "trace_id": {"type": "string_t", "caption": "Trace ID", "extension": "dev"},
            },
        },
        "objects": {
            "group": {
                "caption": "Group",
                "attributes": {
                    "name": {"type": "string_t", "caption": "Name", "_links": _links("group")},
                },
                "_links": _links("user"),
            },
            "user": {
                "caption": "User",
                "attributes": {
                    "name": {"type": "string_t", "caption": "Name"},
                    "group": {"type": "object_t", "object_type": "group", "caption": "Group"},
                },
                "_links": _links("process"),
            },
            "process": {
                "caption": "Process",
                "attributes": {
                    "pid": {"type": "integer_t", "caption": "Process ID"},
                    "user": {
                        "type": "object_t",
                        "object_type": "user",
                        "caption": "User",
                        "_links": _links("user"),
                    },
                },
                "_links": _links("process_activity"),
            },
            "device": {
                "caption": "Device",
                "attributes": {"hostname": {"type": "string_t", "caption": "Hostname"}},
            },
            "trace": {
                "extension": "dev",
                "caption": "Trace",
                "attributes": {"trace_id": {"type": "string_t", "caption": "Trace ID"}},
            },
        },
        "classes": {
            "base_event": {
                "caption": "Base Event",
                "attributes": {
                    "time": {"type": "timestamp_t", "caption": "Event Time", "requirement": "required"},
                    "device": {"type": "object_t", "object_type": "device", "profile": "host"},
                },
            },
            "process_activity": {
                "uid": 1007,
                "category": "system",
                "caption": "Process Activity",
                "profiles": ["host"],
                "attributes": {
                    "time": {"type": "timestamp_t", "caption": "Event Time", "requirement": "required"},
                    "process": {"type": "object_t", "object_type": "process", "caption": "Process"},
                    "device": {"type": "object_t", "object_type": "device", "profile": "host"},
                    "trace": {
                        "type": "object_t",
                        "object_type": "trace",
                        "extension": "dev",
                        "profile": "dev/debug",
                    },
                },
                "_links": _links("system"),
            },
            "authentication": {
                "uid": 3002,
                "category": "iam",
                "caption": "Authentication",
                "attributes": {
                    "time": {"type": "timestamp_t", "caption": "Event Time"},
                    "message": {"type": "string_t", "caption": "Message"},
                },
            },
            "debug_session": {
                "extension": "dev",
                "uid": 9001,
                "category": "system",
                "caption": "Debug Session",
                "attributes": {
                    "trace": {"type": "object_t", "object_type": "trace", "caption": "Trace"},
                },
            },
        },
    }


@pytest.fixture
def catalog(schema_data) -> SchemaCatalog:
    """Catalog built from the in-memory schema."""
    return load_catalog(schema_data)


@pytest.fixture
def composer(catalog) -> ViewComposer:
    return ViewComposer(catalog=catalog)


@pytest.fixture
def sample_schema_path() -> Path:
    """Path to the sample schema shipped at the repository root."""
    return REPO_ROOT / "sample_schema.yaml"


# =============================================================================
# HTTP Fixtures
# =============================================================================

@pytest.fixture
def client(composer):
    """Test client with the schema routes bound to the test catalog."""
    routes.configure(composer)
    yield TestClient(app)
    routes.configure(None)
