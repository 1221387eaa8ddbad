import pytest

from jsonmodel.containers import JsonArray, JsonObject
from jsonmodel.errors import CircularReferenceError, ErrorCode, JsonError
from jsonmodel.scalars import (
    JsonInteger,
    JsonReal,
    JsonString,
    deep_copy,
    equal,
    json_false,
    json_null,
    json_true,
)


def _obj(**items):
    result = JsonObject()
    for key, value in items.items():
        result.set(key, value)
    return result


def _sample_array():
    return JsonArray(
        [JsonInteger(1), JsonString("foo"), JsonReal(3.141592), _obj(foo=JsonString("bar"))]
    )


def _sample_object():
    result = JsonObject()
    result.set("foo", JsonString("bar"))
    result.set("a", JsonInteger(1))
    result.set("b", JsonReal(3.141592))
    result.set("c", JsonArray([JsonInteger(i) for i in (1, 2, 3, 4)]))
    return result


def _complex():
    inner = JsonObject()
    inner.set(
        "array-in-object",
        JsonArray([JsonInteger(1), json_true(), JsonString("foo"), JsonObject()]),
    )
    inner.set("object-in-object", _obj(foo=JsonString("bar")))
    root = JsonObject()
    root.set("integer", JsonInteger(1))
    root.set("real", JsonReal(3.141592))
    root.set("string", JsonString("foobar"))
    root.set("true", json_true())
    root.set("object", inner)
    root.set(
        "array",
        JsonArray([JsonString("foo"), json_false(), json_null(), JsonReal(1.234)]),
    )
    return root


def test_copy_array_shares_elements():
    array = _sample_array()
    copied = array.copy()
    assert copied is not array
    assert equal(copied, array)
    assert all(a is b for a, b in zip(array, copied))


def test_deep_copy_array_copies_elements():
    array = _sample_array()
    copied = array.deep_copy()
    assert copied is not array
    assert equal(copied, array)
    assert all(a is not b for a, b in zip(array, copied))


def test_copy_object_shares_items_and_order():
    obj = _sample_object()
    copied = obj.copy()
    assert copied is not obj
    assert equal(copied, obj)
    assert list(copied.keys()) == ["foo", "a", "b", "c"]
    for key, value in obj.items():
        assert copied.get(key) is value


def test_deep_copy_object_copies_items_and_order():
    obj = _sample_object()
    copied = obj.deep_copy()
    assert equal(copied, obj)
    assert list(copied) == ["foo", "a", "b", "c"]
    for key, value in obj.items():
        assert copied.get(key) is not value


def test_deep_copy_circular_object():
    root = JsonObject()
    a = JsonObject()
    b = JsonObject()
    root.set("a", a)
    a.set("b", b)
    b.set("c", a)
    with pytest.raises(CircularReferenceError):
        root.deep_copy()
    b.delete("c")
    assert equal(deep_copy(root), root)


def test_deep_copy_circular_array():
    root = JsonArray()
    first = JsonArray()
    second = JsonArray()
    root.append(first)
    first.append(second)
    second.append(first)
    with pytest.raises(CircularReferenceError):
        root.deep_copy()
    second.remove(0)
    assert equal(root.deep_copy(), root)


def test_equal_array():
    a1, a2 = JsonArray(), JsonArray()
    assert equal(a1, a2)
    for arr in (a1, a2):
        arr.append(JsonInteger(1))
        arr.append(JsonString("foo"))
        arr.append(JsonInteger(2))
    assert equal(a1, a2)
    a2.remove(2)
    assert not equal(a1, a2)
    a2.append(JsonInteger(3))
    assert not equal(a1, a2)


def test_equal_object():
    o1, o2 = JsonObject(), JsonObject()
    assert equal(o1, o2)
    for obj in (o1, o2):
        obj.set("a", JsonInteger(1))
        obj.set("b", JsonString("foo"))
        obj.set("c", JsonInteger(2))
    assert o1 == o2
    o2.delete("c")
    assert not equal(o1, o2)
    o2.set("c", JsonInteger(3))
    assert not equal(o1, o2)
    o2.delete("c")
    o2.set("d", JsonInteger(2))
    assert not equal(o1, o2)


def test_equal_complex():
    v1, v2, v3 = _complex(), _complex(), _complex()
    assert equal(v1, v2)
    v2.get("object").get("array-in-object").set(1, json_false())
    assert not equal(v1, v2)
    v3.get("object").get("object-in-object").set("foo", JsonString("baz"))
    assert not equal(v1, v3)


def test_array_and_object_not_equal():
    assert not equal(JsonArray(), JsonObject())


def test_object_get_missing_and_none():
    obj = _obj(x=JsonInteger(1))
    assert obj.get("y") is None
    assert obj.get(None) is None
    assert obj.get(b"x") == JsonInteger(1)
    assert "x" in obj and "y" not in obj and 5 not in obj


def test_object_set_replaces_in_place():
    obj = _obj(a=JsonInteger(1), b=JsonInteger(2))
    obj.set("a", JsonInteger(9))
    assert list(obj.keys()) == ["a", "b"]
    assert obj.get("a") == JsonInteger(9)
    assert len(obj) == 2


def test_object_set_invalid_key():
    obj = JsonObject()
    with pytest.raises(JsonError) as info:
        obj.set(b"\xff", JsonInteger(1))
    assert info.value.code is ErrorCode.INVALID_UTF8
    with pytest.raises(JsonError):
        obj.set("\ud800", JsonInteger(1))
    assert len(obj) == 0


def test_object_set_self_and_non_value():
    obj = JsonObject()
    with pytest.raises(JsonError) as info:
        obj.set("me", obj)
    assert info.value.code is ErrorCode.INVALID_ARGUMENT
    with pytest.raises(TypeError):
        obj.set("x", 5)


def test_object_delete_missing():
    obj = JsonObject()
    with pytest.raises(KeyError):
        obj.delete("nope")


def test_object_clear():
    obj = _sample_object()
    obj.clear()
    assert len(obj) == 0


def test_update_variants():
    base = _obj(a=JsonInteger(1), b=JsonInteger(2))
    other = _obj(b=JsonInteger(20), c=JsonInteger(30))

    full = base.copy()
    full.update(other)
    assert equal(full, _obj(a=JsonInteger(1), b=JsonInteger(20), c=JsonInteger(30)))

    existing = base.copy()
    existing.update_existing(other)
    assert equal(existing, _obj(a=JsonInteger(1), b=JsonInteger(20)))

    missing = base.copy()
    missing.update_missing(other)
    assert equal(missing, _obj(a=JsonInteger(1), b=JsonInteger(2), c=JsonInteger(30)))

    with pytest.raises(TypeError):
        base.update(JsonArray())


def test_update_recursive_merges_nested():
    target = _obj(n=_obj(x=JsonInteger(1), y=JsonInteger(2)), k=JsonInteger(0))
    source = _obj(n=_obj(y=JsonInteger(3), z=JsonInteger(4)), k=_obj())
    target.update_recursive(source)
    expected = _obj(
        n=_obj(x=JsonInteger(1), y=JsonInteger(3), z=JsonInteger(4)), k=_obj()
    )
    assert equal(target, expected)


def test_update_recursive_detects_cycle():
    t1, t2 = JsonObject(), JsonObject()
    t1.set("a", t2)
    t2.set("a", t1)
    o1, o2 = JsonObject(), JsonObject()
    o1.set("a", o2)
    o2.set("a", o1)
    with pytest.raises(CircularReferenceError):
        t1.update_recursive(o1)


def test_array_get_and_index():
    arr = JsonArray([JsonInteger(1), JsonInteger(2)])
    assert arr.get(1) == JsonInteger(2)
    assert arr.get(2) is None
    assert arr.get(-1) is None
    assert arr[0] == JsonInteger(1)
    with pytest.raises(IndexError):
        arr[2]


def test_array_set_insert_remove():
    arr = JsonArray([JsonInteger(1), JsonInteger(3)])
    arr.insert(1, JsonInteger(2))
    arr.insert(3, JsonInteger(4))
    assert [item.value for item in arr] == [1, 2, 3, 4]
    arr.set(0, JsonInteger(10))
    arr.remove(3)
    assert [item.value for item in arr] == [10, 2, 3]
    with pytest.raises(IndexError):
        arr.insert(5, JsonInteger(0))
    with pytest.raises(IndexError):
        arr.set(3, JsonInteger(0))
    with pytest.raises(IndexError):
        arr.remove(3)


def test_array_rejects_self_and_non_value():
    arr = JsonArray()
    with pytest.raises(JsonError):
        arr.append(arr)
    with pytest.raises(TypeError):
        arr.append("text")
    assert len(arr) == 0


def test_array_extend_and_clear():
    arr = JsonArray([JsonInteger(1)])
    other = JsonArray([JsonInteger(2), JsonInteger(3)])
    arr.extend(other)
    assert [item.value for item in arr] == [1, 2, 3]
    assert arr[1] is other[0]
    arr.extend(arr)
    assert len(arr) == 6
    with pytest.raises(TypeError):
        arr.extend(JsonObject())
    arr.clear()
    assert len(arr) == 0


def test_many_appends_and_keys():
    obj = JsonObject()
    arr = JsonArray()
    for number in range(100):
        obj.set_nocheck(f"test{number}", JsonObject())
        arr.insert(0, json_null())
    assert len(obj) == 100
    assert list(obj)[-1] == "test99"
    assert len(arr) == 100
    assert all(item is json_null() for item in arr)