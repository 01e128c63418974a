from pydantic import BaseModel


def assert_asts_equal(actual, expected, path="program"):
    """
    Asserts that two ASTs have the same shape and values, ignoring every `span`.
    Node types must match exactly, so `true` never compares equal to `1`.
    A failure names the path of the first mismatch, e.g. `program.body[0].value.left`.
    """
    assert type(actual) is type(expected), f"{path}: expected {type(expected).__name__}, got {type(actual).__name__}"

    if isinstance(actual, BaseModel):
        for field_name in type(actual).model_fields:
            if field_name != "span":
                assert_asts_equal(getattr(actual, field_name), getattr(expected, field_name), f"{path}.{field_name}")

    elif isinstance(actual, list):
        assert len(actual) == len(expected), f"{path}: expected {len(expected)} items, got {len(actual)}"
        for index, (act, exp) in enumerate(zip(actual, expected)):
            assert_asts_equal(act, exp, f"{path}[{index}]")

    else:
        assert actual == expected, f"{path}: expected {expected!r}, got {actual!r}"
