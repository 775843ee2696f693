"""A typed, address-based instruction list that builds meshes procedurally."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Generic, Protocol, Sequence, TypeVar, Union

from polygraph.vecmath import Vec2, Vec3

T = TypeVar("T")


class PolyAsmError(RuntimeError):
    """Raised when a program cannot be built or executed."""


class MeshBackend(Protocol):
    """The mesh operations a program needs to run its mesh instructions."""

    def build_box(self, origin: Vec3, size: Vec3) -> Any: ...

    def build_quad(self, center: Vec3, normal: Vec3, right: Vec3, size: Vec2) -> Any: ...

    def clone_mesh(self, mesh: Any) -> Any:
        """Return an independent copy of the mesh with its debug marks cleared."""

    def vertex_ids(self, mesh: Any) -> Sequence[Any]: ...

    def halfedge_ids(self, mesh: Any) -> Sequence[Any]: ...

    def face_ids(self, mesh: Any) -> Sequence[Any]: ...

    def chamfer_vertex(self, mesh: Any, vertex: Any, amount: float) -> Any: ...

    def bevel_edges(self, mesh: Any, edges: Sequence[Any], amount: float) -> Any: ...

    def extrude_faces(self, mesh: Any, faces: Sequence[Any], amount: float) -> Any: ...

    def merge_with(self, mesh: Any, other: Any) -> None: ...

    def export_obj(self, mesh: Any, path: PurePath) -> None: ...


def _matches(value: object, typ: type) -> bool:
    if typ is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, typ)


@dataclass(frozen=True)
class MemAddr(Generic[T]):
    """A memory address together with the type of value stored there.

    Mesh addresses use ``object`` as their type.
    """

    addr: int
    typ: type

    @classmethod
    def from_raw_checked(
        cls, program: PolyAsmProgram, addr: int, param_name: str, typ: type
    ) -> MemAddr:
        """Type an address, failing unless it holds a value of that type."""
        if program._holds(addr, typ):
            return cls(addr, typ)
        raise PolyAsmError(
            "Could not make address. The value of param "
            f"{param_name!r} is not of the right type."
        )


@dataclass(frozen=True)
class MakeCube:
    origin: MemAddr[Vec3]
    size: MemAddr[Vec3]
    out_mesh: MemAddr[Any]


@dataclass(frozen=True)
class MakeQuad:
    center: MemAddr[Vec3]
    normal: MemAddr[Vec3]
    right: MemAddr[Vec3]
    size: MemAddr[Vec2]
    out_mesh: MemAddr[Any]


@dataclass(frozen=True)
class ChamferVertices:
    vertices: MemAddr[tuple]
    amount: MemAddr[float]
    in_mesh: MemAddr[Any]
    out_mesh: MemAddr[Any]


@dataclass(frozen=True)
class BevelEdges:
    edges: MemAddr[tuple]
    amount: MemAddr[float]
    in_mesh: MemAddr[Any]
    out_mesh: MemAddr[Any]


@dataclass(frozen=True)
class ExtrudeFaces:
    faces: MemAddr[tuple]
    amount: MemAddr[float]
    in_mesh: MemAddr[Any]
    out_mesh: MemAddr[Any]


@dataclass(frozen=True)
class MakeVector:
    x: MemAddr[float]
    y: MemAddr[float]
    z: MemAddr[float]
    out_vec: MemAddr[Vec3]


@dataclass(frozen=True)
class VectorAdd:
    a: MemAddr[Vec3]
    b: MemAddr[Vec3]
    out_vec: MemAddr[Vec3]


@dataclass(frozen=True)
class VectorSub:
    a: MemAddr[Vec3]
    b: MemAddr[Vec3]
    out_vec: MemAddr[Vec3]


@dataclass(frozen=True)
class MergeMeshes:
    a: MemAddr[Any]
    b: MemAddr[Any]
    out_mesh: MemAddr[Any]


@dataclass(frozen=True)
class ExportObj:
    in_mesh: MemAddr[Any]
    export_path: MemAddr[PurePath]


PolyAsmInstruction = Union[
    MakeCube,
    MakeQuad,
    ChamferVertices,
    BevelEdges,
    ExtrudeFaces,
    MakeVector,
    VectorAdd,
    VectorSub,
    MergeMeshes,
    ExportObj,
]

_UNSET = object()


def _pick(ids: Sequence[Any], indices: Sequence[int]) -> list[Any]:
    picked = []
    for index in indices:
        if not 0 <= index < len(ids):
            raise PolyAsmError(f"Invalid index: {index}")
        picked.append(ids[index])
    return picked


class PolyAsmProgram:
    """A list of instructions over a typed memory, producing a mesh."""

    def __init__(self, backend: MeshBackend | None = None) -> None:
        self._backend = backend
        self._instructions: list[PolyAsmInstruction] = []
        self._output_register: MemAddr | None = None
        self._memory: dict[int, object] = {}
        self._next_addr = 0

    @property
    def instructions(self) -> tuple[PolyAsmInstruction, ...]:
        return tuple(self._instructions)

    @property
    def backend(self) -> MeshBackend:
        if self._backend is None:
            raise PolyAsmError("No mesh backend is configured for this program")
        return self._backend

    def _new_addr(self, value: object) -> int:
        addr = self._next_addr
        self._next_addr += 1
        self._memory[addr] = value
        return addr

    def _holds(self, addr: int, typ: type) -> bool:
        value = self._memory.get(addr, _UNSET)
        return value is not _UNSET and _matches(value, typ)

    def mem_alloc_raw(self, value: object) -> int:
        """Store a value at a fresh untyped address."""
        return self._new_addr(value)

    def mem_reserve(self, typ: type) -> MemAddr:
        """Reserve an address for a value of ``typ``; fetching it fails until stored."""
        return MemAddr(self._new_addr(_UNSET), typ)

    def mem_store(self, addr: MemAddr, value: object) -> None:
        if addr.addr not in self._memory:
            raise PolyAsmError(f"Error storing: no such address {addr!r}")
        if not _matches(value, addr.typ):
            raise PolyAsmError(
                f"Error storing: {type(value).__name__} is not {addr.typ.__name__}"
            )
        self._memory[addr.addr] = value

    def mem_retrieve(self, addr: MemAddr) -> Any:
        """Take the value out of memory, leaving the address empty."""
        if not self._holds(addr.addr, addr.typ):
            raise PolyAsmError("Error retrieving from mem")
        value = self._memory[addr.addr]
        self._memory[addr.addr] = _UNSET
        return value

    def mem_fetch(self, addr: MemAddr) -> Any:
        if not self._holds(addr.addr, addr.typ):
            raise PolyAsmError(f"Memory fetch error for address {addr!r}")
        return self._memory[addr.addr]

    def add_operation(self, op: PolyAsmInstruction) -> None:
        self._instructions.append(op)

    def _store_mesh(self, out_mesh: MemAddr, mesh: object) -> None:
        self.mem_store(out_mesh, mesh)
        self._output_register = out_mesh

    def execute_instruction(self, instr: PolyAsmInstruction) -> None:
        match instr:
            case MakeCube(origin=origin, size=size, out_mesh=out_mesh):
                mesh = self.backend.build_box(self.mem_fetch(origin), self.mem_fetch(size))
                self._store_mesh(out_mesh, mesh)
            case MakeQuad(
                center=center, normal=normal, right=right, size=size, out_mesh=out_mesh
            ):
                mesh = self.backend.build_quad(
                    self.mem_fetch(center),
                    self.mem_fetch(normal),
                    self.mem_fetch(right),
                    self.mem_fetch(size),
                )
                self._store_mesh(out_mesh, mesh)
            case ChamferVertices(
                vertices=vertices, amount=amount, in_mesh=in_mesh, out_mesh=out_mesh
            ):
                indices = self.mem_fetch(vertices)
                amount_value = self.mem_fetch(amount)
                backend = self.backend
                result = backend.clone_mesh(self.mem_fetch(in_mesh))
                ids = list(backend.vertex_ids(result))
                for index in indices:
                    (vertex,) = _pick(ids, [index])
                    backend.chamfer_vertex(result, vertex, amount_value)
                self._store_mesh(out_mesh, result)
            case BevelEdges(edges=edges, amount=amount, in_mesh=in_mesh, out_mesh=out_mesh):
                indices = self.mem_fetch(edges)
                amount_value = self.mem_fetch(amount)
                backend = self.backend
                result = backend.clone_mesh(self.mem_fetch(in_mesh))
                chosen = _pick(list(backend.halfedge_ids(result)), indices)
                backend.bevel_edges(result, chosen, amount_value)
                self._store_mesh(out_mesh, result)
            case ExtrudeFaces(faces=faces, amount=amount, in_mesh=in_mesh, out_mesh=out_mesh):
                indices = self.mem_fetch(faces)
                amount_value = self.mem_fetch(amount)
                backend = self.backend
                result = backend.clone_mesh(self.mem_fetch(in_mesh))
                chosen = _pick(list(backend.face_ids(result)), indices)
                backend.extrude_faces(result, chosen, amount_value)
                self._store_mesh(out_mesh, result)
            case MakeVector(x=x, y=y, z=z, out_vec=out_vec):
                vector = Vec3(self.mem_fetch(x), self.mem_fetch(y), self.mem_fetch(z))
                self.mem_store(out_vec, vector)
            case VectorAdd(a=a, b=b, out_vec=out_vec):
                self.mem_store(out_vec, self.mem_fetch(a) + self.mem_fetch(b))
            case VectorSub(a=a, b=b, out_vec=out_vec):
                self.mem_store(out_vec, self.mem_fetch(a) - self.mem_fetch(b))
            case MergeMeshes(a=a, b=b, out_mesh=out_mesh):
                mesh_a = self.mem_fetch(a)
                mesh_b = self.mem_fetch(b)
                backend = self.backend
                result = backend.clone_mesh(mesh_a)
                backend.merge_with(result, mesh_b)
                self._store_mesh(out_mesh, result)
            case ExportObj(in_mesh=in_mesh, export_path=export_path):
                mesh = self.mem_fetch(in_mesh)
                path = self.mem_fetch(export_path)
                self.backend.export_obj(mesh, path)
            case _:
                raise PolyAsmError(f"Unknown instruction: {instr!r}")

    def execute(self) -> Any:
        """Run every instruction and return the last mesh produced."""
        for instruction in list(self._instructions):
            self.execute_instruction(instruction)
        if self._output_register is None:
            raise PolyAsmError("No operations produced output")
        return self.mem_retrieve(self._output_register)