from polygraph.graph_types import OutputId
from polygraph.outputs_cache import OutputsCache
from polygraph.poly_asm import MemAddr, PolyAsmProgram
from polygraph.vecmath import Vec3


def test_get_missing_returns_none():
    cache = OutputsCache()
    assert cache.get(OutputId(0)) is None
    assert len(cache) == 0


def test_insert_then_get_returns_same_address():
    program = PolyAsmProgram()
    addr = program.mem_reserve(Vec3)
    cache = OutputsCache()
    cache.insert(OutputId(3), addr)
    assert cache.get(OutputId(3)) == addr
    assert OutputId(3) in cache


def test_insert_overwrites_previous_address():
    cache = OutputsCache()
    first = MemAddr(0, Vec3)
    second = MemAddr(1, object)
    cache.insert(OutputId(1), first)
    cache.insert(OutputId(1), second)
    assert cache.get(OutputId(1)) == second
    assert len(cache) == 1


def test_distinct_outputs_are_kept_apart():
    cache = OutputsCache()
    a = MemAddr(0, Vec3)
    b = MemAddr(1, Vec3)
    cache.insert(OutputId(1), a)
    cache.insert(OutputId(2), b)
    assert cache.get(OutputId(1)) == a
    assert cache.get(OutputId(2)) == b