import pytest

from pngme.core import Chunk
from pngme.exceptions import MagicException, MalformedInputException
from pngme.fields import StructField, StringField, ArrayField
from pngme.meta import Meta
from pngme.properties import Dependency


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I', default=0xbad)
        b = StringField(0x10)
        c = StructField('I', default=0xdeadbeef)

    dummy = Dummy()

    assert isinstance(dummy._meta, Meta)
    assert dummy._meta.fields == ['a', 'b', 'c']

    assert dummy.a.size == 4
    assert dummy.a.raw == b'\x00\x00\x0b\xad'
    assert dummy.a.value == 0xbad
    assert dummy.a.offset == 0x00
    assert dummy.a.father == dummy

    assert dummy.b.size == 0x10
    assert dummy.b.raw == b'\x00' * 0x10
    assert dummy.b.offset == 0x04

    assert dummy.c.size == 0x4
    assert dummy.c.raw == b'\xde\xad\xbe\xef'
    assert dummy.c.offset == 0x14

    assert dummy.size == 0x18
    assert len(dummy.raw) == dummy.size
    assert dummy.pack() == (
        b'\x00\x00\x0b\xad' +
        b'\x00' * 0x10 +
        b'\xde\xad\xbe\xef'
    )
    assert dummy.layout == {
        'a': (0, 4),
        'b': (4, 16),
        'c': (20, 4),
    }


def test_fields_are_per_instance():
    class Dummy(Chunk):
        a = StructField('I')

    first = Dummy(a=1)
    second = Dummy(a=2)

    assert first.a is not second.a
    assert (first.a.value, second.a.value) == (1, 2)


def test_inheritance():
    '''subclasses inherit fields'''
    class Father(Chunk):
        field_a = StringField(0x10)
        field_b = StructField("I")

    class Son(Father):
        field_c = StringField(0x08)

    field_b_value = b'\x01\x02\x03\x04'
    field_c_value = b'ABCDEFGH'
    son = Son(b'A' * 16 + field_b_value + field_c_value)

    assert [_ for _, __ in son.get_fields()] == [
        'field_a', 'field_b', 'field_c',
    ]
    assert son.field_b.value == 0x01020304, f'field_b is {son.field_b.value:x}'
    assert son.field_c.value == field_c_value


def test_chunk_w_dependencies():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'))

    example = Example(data=b'kebab')

    assert example.sz.father == example
    assert example.sz.value == 5
    assert example.data.value == b'kebab'
    assert example.pack() == b'\x00\x00\x00\x05kebab'

    example.data = b'pizza margherita'

    assert example.sz.value == 16

    unpacked = Example(b'\x00\x00\x00\x03abcdef')

    assert unpacked.data.value == b'abc'
    assert unpacked.size == 7


def test_dependency_into_sub_chunk():
    class Header(Chunk):
        count = StructField('B')

    class Root(Chunk):
        header = Header()
        body = StringField(Dependency('.header.count'))

    root = Root(b'\x03abc')

    assert root.body.value == b'abc'

    root = Root(body=b'xy')

    assert root.header.count.value == 2
    assert root.pack() == b'\x02xy'


@pytest.mark.parametrize('expression', ['length', 'header.length', '.'])
def test_dependency_must_be_relative(expression):
    with pytest.raises(ValueError):
        Dependency(expression)


class Inner(Chunk):
    sz = StructField('B')
    data = StringField(Dependency('.sz'))


class Outer(Chunk):
    magic = StringField(default=b'OK', is_magic=True)
    inner = Inner()
    items = ArrayField(Inner)


def test_unpack_nested():
    outer = Outer(b'OK' + b'\x02ab' + b'\x01x' + b'\x00')

    assert outer.inner.data.value == b'ab'
    assert [_.data.value for _ in outer.items] == [b'x', b'']
    assert [_.offset for _ in outer.items] == [5, 7]
    assert outer.pack() == b'OK\x02ab\x01x\x00'


def test_unpack_exception_chain():
    with pytest.raises(MalformedInputException) as excinfo:
        Outer(b'OK' + b'\x02ab' + b'\x01x' + b'\x03yy')

    assert excinfo.value.chain == ['data', '1', 'items']
    assert excinfo.value.path == 'items.1.data'
    assert str(excinfo.value).startswith('items.1.data: ')

    with pytest.raises(MagicException) as excinfo:
        Outer(b'KO\x00')

    assert excinfo.value.path == 'magic'


def test_equality():
    raw = b'OK\x02ab\x01x'

    assert Outer(raw) == Outer(raw)
    assert Outer(raw) != Outer(b'OK\x02ab\x01y')
    assert Inner(raw[2:]) != Outer(raw)


def test_set_value():
    class Dummy(Chunk):
        a = StructField('B')
        b = StructField('B')

    dummy = Dummy()
    dummy.value = {'a': 1, 'b': 2}

    assert dummy.value == {'a': 1, 'b': 2}
    assert dummy.pack() == b'\x01\x02'

    with pytest.raises(AttributeError):
        dummy.value = {'c': 3}


def test_read_only():
    class Frozen(Chunk):
        read_only = True

        a = StructField('H')
        b = StringField(Dependency('.a'))

    frozen = Frozen(b=b'abc')

    assert frozen.a.value == 3

    with pytest.raises(AttributeError):
        frozen.a.value = 4

    with pytest.raises(AttributeError):
        frozen.b = b'abcd'

    with pytest.raises(AttributeError):
        frozen.a = StructField('H')

    assert frozen.pack() == b'\x00\x03abc'


def test_unpack_and_set_at_the_same_time():
    class Dummy(Chunk):
        a = StructField('B')

    with pytest.raises(ValueError):
        Dummy(b'\x01', a=2)
