import datetime
import re

import pytest

from semiclient import Date, GeoRange, UsageError, WhereFilter, WhereOperands, parse_where, serialize_where
from semiclient.filters import value_key

VALUE_KEY = re.compile(r"value(Int|Number|String|Boolean|Date|GeoRange):")


def test_mapping_leaf_with_int():
    text = serialize_where(parse_where({"operator": "GreaterThanEqual", "path": ["wordCount"], "valueInt": 50}))

    assert text == '{operator: GreaterThanEqual, path: ["wordCount"], valueInt: 50}'
    assert "valueNumber" not in text
    assert "valueString" not in text


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, "valueBoolean: true"),
        (False, "valueBoolean: false"),
        (7, "valueInt: 7"),
        (1.5, "valueNumber: 1.5"),
        (2.0, "valueNumber: 2.0"),
        ("apple", 'valueString: "apple"'),
        ('say "hi"', 'valueString: "say \\"hi\\""'),
        (Date("2020-01-02T03:04:05Z"), 'valueDate: "2020-01-02T03:04:05Z"'),
        (
            datetime.datetime(2020, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc),
            'valueDate: "2020-01-02T03:04:05+00:00"',
        ),
        (datetime.datetime(2020, 1, 2, 3, 4, 5), 'valueDate: "2020-01-02T03:04:05Z"'),
        (datetime.date(2020, 1, 2), 'valueDate: "2020-01-02T00:00:00Z"'),
    ],
)
def test_value_key_follows_runtime_type(value, expected):
    text = serialize_where(WhereFilter(["prop"], "Equal", value))
    assert text.endswith(expected + "}")
    assert len(VALUE_KEY.findall(text)) == 1


def test_unsupported_value_type():
    with pytest.raises(UsageError, match="unsupported where filter value"):
        serialize_where(WhereFilter(["prop"], "Equal", object()))
    with pytest.raises(UsageError):
        value_key([1, 2])


def test_non_finite_number():
    with pytest.raises(UsageError, match="finite"):
        serialize_where(WhereFilter(["prop"], "Equal", float("nan")))


def nested_tree():
    return WhereOperands(
        "And",
        [
            WhereFilter(["title"], "Equal", "apple"),
            WhereOperands(
                "Or",
                [
                    WhereFilter(["wordCount"], "LessThan", 10),
                    WhereFilter(["wordCount"], "GreaterThan", 100),
                ],
            ),
        ],
    )


def test_nested_operands():
    assert serialize_where(nested_tree()) == (
        '{operator: And, operands: ['
        '{operator: Equal, path: ["title"], valueString: "apple"}, '
        '{operator: Or, operands: ['
        '{operator: LessThan, path: ["wordCount"], valueInt: 10}, '
        '{operator: GreaterThan, path: ["wordCount"], valueInt: 100}]}]}'
    )


def test_serialization_is_deterministic():
    tree = nested_tree()
    text = serialize_where(tree)
    assert serialize_where(tree) == text
    assert serialize_where(nested_tree()) == text
    assert len(VALUE_KEY.findall(text)) == 3


def test_operand_order_is_preserved():
    first = WhereFilter(["a"], "Equal", 1)
    second = WhereFilter(["b"], "Equal", 2)
    text = serialize_where(WhereOperands("Or", [second, first]))
    assert text.index('["b"]') < text.index('["a"]')


def test_multi_segment_path():
    text = serialize_where(WhereFilter(["inPublication", "Publication", "name"], "Like", "New*"))
    assert 'path: ["inPublication", "Publication", "name"]' in text


def test_not_takes_one_operand():
    leaf = WhereFilter(["a"], "Equal", 1)
    assert serialize_where(WhereOperands("Not", [leaf])).startswith("{operator: Not, operands: [")
    with pytest.raises(UsageError, match="exactly one operand"):
        serialize_where(WhereOperands("Not", [leaf, leaf]))


@pytest.mark.parametrize(
    "node, message",
    [
        (WhereFilter(["a"], "Equals", 1), "unsupported where operator 'Equals'"),
        (WhereFilter(["a"], "And", 1), "unsupported where operator 'And'"),
        (WhereFilter(["a"], ["Equal"], 1), "unsupported where operator ['Equal']"),
        (WhereOperands({"And": 1}, [WhereFilter(["a"], "Equal", 1)]), "unsupported where operator {'And': 1}"),
        (WhereOperands("Equal", [WhereFilter(["a"], "Equal", 1)]), "unsupported where operator 'Equal'"),
        (WhereOperands("And", []), "needs at least one operand"),
        (WhereFilter([], "Equal", 1), "path must be a non-empty list"),
        (WhereFilter(["location"], "WithinGeoRange", 1), "cannot be used with valueInt"),
        (WhereFilter(["location"], "Equal", GeoRange(1.0, 2.0, 3.0)), "cannot be used with valueGeoRange"),
        ("title = apple", "must be a WhereFilter or WhereOperands"),
    ],
)
def test_invalid_trees(node, message):
    with pytest.raises(UsageError, match=re.escape(message)):
        serialize_where(node)


def test_geo_range():
    node = parse_where(
        {
            "operator": "WithinGeoRange",
            "path": ["location"],
            "valueGeoRange": {"geoCoordinates": {"latitude": 51.5, "longitude": -0.1}, "distance": {"max": 2000.0}},
        }
    )
    assert node.value == GeoRange(51.5, -0.1, 2000.0)
    assert serialize_where(node) == (
        '{operator: WithinGeoRange, path: ["location"], '
        "valueGeoRange: {geoCoordinates: {latitude: 51.5, longitude: -0.1}, distance: {max: 2000.0}}}"
    )


def test_parse_nested_mapping():
    node = parse_where(
        {
            "operator": "And",
            "operands": [
                {"operator": "Equal", "path": ["title"], "valueString": "apple"},
                {
                    "operator": "Or",
                    "operands": [
                        {"operator": "LessThan", "path": ["wordCount"], "valueInt": 10},
                        {"operator": "GreaterThan", "path": ["wordCount"], "valueInt": 100},
                    ],
                },
            ],
        }
    )
    assert node == nested_tree()


def test_parse_returns_trees_unchanged():
    tree = nested_tree()
    assert parse_where(tree) is tree


def test_parse_number_tag_widens_int():
    node = parse_where({"operator": "Equal", "path": ["price"], "valueNumber": 5})
    assert node.value == 5.0
    assert serialize_where(node).endswith("valueNumber: 5.0}")


def test_parse_date_string():
    node = parse_where({"operator": "GreaterThan", "path": ["published"], "valueDate": "2020-01-01T00:00:00Z"})
    assert isinstance(node.value, Date)
    assert serialize_where(node).endswith('valueDate: "2020-01-01T00:00:00Z"}')


@pytest.mark.parametrize(
    "source, message",
    [
        ({"path": ["a"], "valueInt": 1}, "must have an operator"),
        ({"operator": "Equal", "path": ["a"]}, "exactly one value key"),
        ({"operator": "Equal", "path": ["a"], "valueInt": 1, "valueString": "1"}, "exactly one value key"),
        ({"operator": "Equal", "path": ["a"], "valueInt": "5"}, "valueInt does not accept '5'"),
        ({"operator": "Equal", "path": ["a"], "valueInt": True}, "valueInt does not accept True"),
        ({"operator": "Equal", "path": ["a"], "valueBoolean": 1}, "valueBoolean does not accept 1"),
        ({"operator": "Equal", "path": ["a"], "valueText": "x"}, "unknown where filter value key 'valueText'"),
        ({"operator": "Equal", "valueInt": 1}, "path must be a list"),
        ({"operator": "And", "operands": "abc"}, "operands must be a list"),
        ({"operator": "WithinGeoRange", "path": ["a"], "valueGeoRange": {}}, "valueGeoRange must have"),
        (["operator", "Equal"], "must be a mapping"),
        ({"operator": "Equal", "path": ["a"], 1: "x"}, "exactly one value key, got []"),
        ({"operator": "Equal", "path": ["a"], ("valueInt",): 1}, "exactly one value key, got []"),
    ],
)
def test_parse_rejects_malformed_mappings(source, message):
    with pytest.raises(UsageError, match=re.escape(message)):
        parse_where(source)
