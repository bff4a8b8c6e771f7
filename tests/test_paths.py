import pytest

from semiclient import KIND_ACTIONS, KIND_THINGS, BeaconFormat, ReferencePayloadBuilder, UsageError, build_beacon
from semiclient.paths import Include, Operation, include_params, object_path, reference_path, schema_path, with_query


@pytest.mark.parametrize(
    "operation, expected",
    [
        (Operation.CREATE, "/things"),
        (Operation.LIST, "/things"),
        (Operation.VALIDATE, "/things/validate"),
        (Operation.GET, "/things/abc"),
        (Operation.UPDATE, "/things/abc"),
        (Operation.MERGE, "/things/abc"),
        (Operation.DELETE, "/things/abc"),
    ],
)
def test_object_paths(operation, expected):
    assert object_path(operation, KIND_THINGS, "abc") == expected


def test_object_path_uses_kind_segment():
    assert object_path(Operation.DELETE, KIND_ACTIONS, "abc") == "/actions/abc"


def test_reference_path():
    assert reference_path(KIND_THINGS, "abc", "refProp") == "/things/abc/references/refProp"


def test_schema_paths():
    assert schema_path() == "/schema"
    assert schema_path(KIND_ACTIONS) == "/schema/actions"
    assert schema_path(KIND_THINGS, "Article") == "/schema/things/Article"


def test_include_order_follows_enablement():
    params = include_params([Include.VECTOR, Include.CLASSIFICATION], limit=2)
    assert with_query("/things", params) == "/things?include=vector,classification&limit=2"

    params = include_params([Include.CLASSIFICATION, Include.VECTOR])
    assert params == [("include", "classification,vector")]


def test_include_each_token_once():
    params = include_params([Include.NEAREST_NEIGHBORS, Include.VECTOR, Include.NEAREST_NEIGHBORS])
    assert params == [("include", "nearestNeighbors,vector")]


def test_no_params():
    assert include_params([]) == []
    assert with_query("/things", []) == "/things"
    assert with_query("/things", include_params([], limit=5)) == "/things?limit=5"


def test_beacon_equality():
    assert build_beacon(KIND_THINGS, "abc") == build_beacon("things", "abc")
    assert build_beacon(KIND_THINGS, "abc") == "weaviate://localhost/things/abc"
    assert build_beacon(KIND_THINGS, "abc") != build_beacon(KIND_ACTIONS, "abc")
    assert build_beacon(KIND_THINGS, "abc") != build_beacon(KIND_THINGS, "abd")


def test_custom_beacon_format():
    fmt = BeaconFormat("beacon:{kind}:{id}")
    assert build_beacon(KIND_ACTIONS, "abc", fmt) == "beacon:actions:abc"


def test_reference_payload():
    payload = ReferencePayloadBuilder().with_id("abc").with_kind(KIND_ACTIONS).payload()
    assert payload == {"beacon": "weaviate://localhost/actions/abc"}
    assert payload == ReferencePayloadBuilder().with_kind("actions").with_id("abc").payload()


def test_reference_payload_requires_id():
    with pytest.raises(UsageError) as excinfo:
        ReferencePayloadBuilder().payload()
    assert str(excinfo.value) == "invalid usage: id must be set - set with .with_id(id)"
