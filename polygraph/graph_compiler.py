"""Compiles a node graph into a PolyAsm program that computes one node."""

from __future__ import annotations

from pathlib import Path, PurePath

from polygraph.graph_types import (
    EnumValue,
    Graph,
    GraphError,
    InputParamValue,
    NewFileValue,
    NodeId,
    NoValue,
    ScalarValue,
    SelectionValue,
    VectorValue,
)
from polygraph.outputs_cache import OutputsCache
from polygraph.poly_asm import (
    BevelEdges,
    ChamferVertices,
    ExportObj,
    ExtrudeFaces,
    MakeCube,
    MakeQuad,
    MakeVector,
    MemAddr,
    MergeMeshes,
    PolyAsmError,
    PolyAsmProgram,
    VectorAdd,
    VectorSub,
)
from polygraph.vecmath import Vec2, Vec3

# Meshes are opaque to the program, so their addresses are typed as `object`.
_MESH = object


class CompileError(PolyAsmError):
    """Raised when a graph cannot be turned into a program."""


def _constant(value: InputParamValue, param_name: str, node_id: NodeId) -> object:
    match value:
        case VectorValue(value=vector):
            return vector
        case ScalarValue(value=scalar):
            return float(scalar)
        case SelectionValue(selection=selection):
            if selection is None:
                raise CompileError(
                    f"Error parsing selection for parameter {param_name!r}"
                )
            return tuple(selection)
        case NoValue():
            raise CompileError(
                f"Parameter {param_name} of node {node_id!r} should have a connection"
            )
        case EnumValue(values=values, selection=selection):
            if selection is None:
                raise CompileError(
                    f"No selection has been made for parameter {param_name}"
                )
            if not 0 <= selection < len(values):
                raise CompileError(f"Invalid selection index for parameter {param_name}")
            return values[selection]
        case NewFileValue(path=path):
            if path is None:
                raise CompileError("Path is not set")
            return path if isinstance(path, PurePath) else Path(path)
        case _:
            raise CompileError(f"Unsupported value for parameter {param_name}")


class _CodeGenerator:
    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self.program = PolyAsmProgram()
        self.cache = OutputsCache()

    def input(self, node_id: NodeId, param_name: str, typ: type) -> MemAddr:
        """Make sure the input's value is computed and return its address."""
        try:
            param = self.graph[node_id].get_input(param_name)
        except GraphError as err:
            raise CompileError(str(err)) from err

        output = self.graph.connection(param)
        if output is not None:
            addr = self.cache.get(output)
            if addr is None:
                self.generate(self.graph[output].node)
                addr = self.cache.get(output)
                if addr is None:
                    raise CompileError(
                        f"Code generation did not produce output {output!r}"
                    )
            if addr.typ is not typ:
                raise CompileError(
                    "Could not make address. The value of param "
                    f"{param_name!r} is not of the right type."
                )
            return addr

        value = _constant(self.graph[param].value, param_name, node_id)
        raw = self.program.mem_alloc_raw(value)
        try:
            return MemAddr.from_raw_checked(self.program, raw, param_name, typ)
        except PolyAsmError as err:
            raise CompileError(str(err)) from err

    def output(self, node_id: NodeId, param_name: str, typ: type) -> MemAddr:
        """Reserve the address of an output and record it in the cache."""
        addr = self.program.mem_reserve(typ)
        try:
            param = self.graph[node_id].get_output(param_name)
        except GraphError as err:
            raise CompileError(str(err)) from err
        self.cache.insert(param, addr)
        return addr

    def generate(self, node_id: NodeId) -> None:
        """Emit the instructions for a node, after those for its inputs."""

        def inp(name: str, typ: type) -> MemAddr:
            return self.input(node_id, name, typ)

        def out(name: str, typ: type) -> MemAddr:
            return self.output(node_id, name, typ)

        match self.graph[node_id].op_name:
            case "MakeBox":
                instr = MakeCube(
                    origin=inp("origin", Vec3),
                    size=inp("size", Vec3),
                    out_mesh=out("out_mesh", _MESH),
                )
            case "MakeQuad":
                instr = MakeQuad(
                    center=inp("center", Vec3),
                    normal=inp("normal", Vec3),
                    right=inp("right", Vec3),
                    size=inp("size", Vec2),
                    out_mesh=out("out_mesh", _MESH),
                )
            case "BevelEdges":
                instr = BevelEdges(
                    edges=inp("edges", tuple),
                    amount=inp("amount", float),
                    in_mesh=inp("in_mesh", _MESH),
                    out_mesh=out("out_mesh", _MESH),
                )
            case "ExtrudeFaces":
                instr = ExtrudeFaces(
                    faces=inp("faces", tuple),
                    amount=inp("amount", float),
                    in_mesh=inp("in_mesh", _MESH),
                    out_mesh=out("out_mesh", _MESH),
                )
            case "ChamferVertices":
                instr = ChamferVertices(
                    vertices=inp("vertices", tuple),
                    amount=inp("amount", float),
                    in_mesh=inp("in_mesh", _MESH),
                    out_mesh=out("out_mesh", _MESH),
                )
            case "MakeVector":
                instr = MakeVector(
                    x=inp("x", float),
                    y=inp("y", float),
                    z=inp("z", float),
                    out_vec=out("out_vec", Vec3),
                )
            case "VectorMath":
                op_addr = inp("vec_op", str)
                try:
                    op = self.program.mem_fetch(op_addr)
                except PolyAsmError as err:
                    raise CompileError(f"Expected constant. {err}") from err
                match op:
                    case "ADD":
                        instr = VectorAdd(
                            a=inp("A", Vec3), b=inp("B", Vec3), out_vec=out("out_vec", Vec3)
                        )
                    case "SUB":
                        instr = VectorSub(
                            a=inp("A", Vec3), b=inp("B", Vec3), out_vec=out("out_vec", Vec3)
                        )
                    case invalid:
                        raise CompileError(f"Invalid VectorMath operation: {invalid}")
            case "MergeMeshes":
                instr = MergeMeshes(
                    a=inp("A", _MESH),
                    b=inp("B", _MESH),
                    out_mesh=out("out_mesh", _MESH),
                )
            case "ExportObj":
                instr = ExportObj(
                    in_mesh=inp("mesh", _MESH),
                    export_path=inp("export_path", PurePath),
                )
            case invalid:
                raise CompileError(f"Unknown op_name {invalid}")
        self.program.add_operation(instr)


def compile_graph(graph: Graph, final_node: NodeId) -> PolyAsmProgram:
    """Build a program that computes `final_node` and everything it depends on."""
    generator = _CodeGenerator(graph)
    generator.generate(final_node)
    return generator.program