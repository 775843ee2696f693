"""The catalogue of node types that can be added to a graph."""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from polygraph.graph_types import (
    DataType,
    EnumInput,
    MeshInput,
    NewFileInput,
    NodeDescriptor,
    OutputDescriptor,
    ScalarInput,
    SelectionInput,
    VectorInput,
)
from polygraph.vecmath import Vec3


def _vector(name: str, default: Vec3):
    return name, VectorInput(default)


def _scalar(name: str, default: float = 0.0, low: float = -1.0, high: float = 2.0):
    return name, ScalarInput(default=default, min=low, max=high)


def _mesh(name: str):
    return name, MeshInput()


def _selection(name: str):
    return name, SelectionInput()


def _file(name: str):
    return name, NewFileInput()


def _enum(name: str, *values: str):
    return name, EnumInput(tuple(values))


def _out_mesh(name: str):
    return name, OutputDescriptor(DataType.MESH)


def _out_vector(name: str):
    return name, OutputDescriptor(DataType.VECTOR)


class GraphNodeType(Enum):
    """Every kind of node; the value is the op name the compiler dispatches on."""

    MAKE_BOX = "MakeBox"
    MAKE_QUAD = "MakeQuad"
    BEVEL_EDGES = "BevelEdges"
    EXTRUDE_FACES = "ExtrudeFaces"
    CHAMFER_VERTICES = "ChamferVertices"
    MAKE_VECTOR = "MakeVector"
    VECTOR_MATH = "VectorMath"
    MERGE_MESHES = "MergeMeshes"
    EXPORT_OBJ = "ExportObj"

    @staticmethod
    def all_types() -> Iterator[GraphNodeType]:
        return iter(GraphNodeType)

    def type_label(self) -> str:
        return _LABELS[self]

    def op_name(self) -> str:
        return self.value

    def to_descriptor(self) -> NodeDescriptor:
        """The inputs and outputs a node of this type is created with."""
        executable = False
        outputs = [_out_mesh("out_mesh")]
        match self:
            case GraphNodeType.MAKE_BOX:
                inputs = [_vector("origin", Vec3.ZERO), _vector("size", Vec3.ONE)]
            case GraphNodeType.MAKE_QUAD:
                inputs = [
                    _vector("center", Vec3.ZERO),
                    _vector("normal", Vec3.Y),
                    _vector("right", Vec3.X),
                    _vector("size", Vec3.ONE),
                ]
            case GraphNodeType.BEVEL_EDGES:
                inputs = [
                    _mesh("in_mesh"),
                    _selection("edges"),
                    _scalar("amount", 0.0, 0.0, 1.0),
                ]
            case GraphNodeType.EXTRUDE_FACES:
                inputs = [
                    _mesh("in_mesh"),
                    _selection("faces"),
                    _scalar("amount", 0.0, 0.0, 1.0),
                ]
            case GraphNodeType.CHAMFER_VERTICES:
                inputs = [
                    _mesh("in_mesh"),
                    _selection("vertices"),
                    _scalar("amount", 0.0, 0.0, 1.0),
                ]
            case GraphNodeType.MAKE_VECTOR:
                inputs = [_scalar("x"), _scalar("y"), _scalar("z")]
                outputs = [_out_vector("out_vec")]
            case GraphNodeType.VECTOR_MATH:
                inputs = [
                    _enum("vec_op", "ADD", "SUB"),
                    _vector("A", Vec3.ZERO),
                    _vector("B", Vec3.ZERO),
                ]
                outputs = [_out_vector("out_vec")]
            case GraphNodeType.MERGE_MESHES:
                inputs = [_mesh("A"), _mesh("B")]
            case GraphNodeType.EXPORT_OBJ:
                inputs = [_mesh("mesh"), _file("export_path")]
                outputs = []
                executable = True
        return NodeDescriptor(
            op_name=self.op_name(),
            label=self.type_label(),
            inputs=inputs,
            outputs=outputs,
            is_executable=executable,
        )


_LABELS = {
    GraphNodeType.MAKE_BOX: "Box",
    GraphNodeType.MAKE_QUAD: "Quad",
    GraphNodeType.BEVEL_EDGES: "Bevel edges",
    GraphNodeType.EXTRUDE_FACES: "Extrude faces",
    GraphNodeType.CHAMFER_VERTICES: "Chamfer vertices",
    GraphNodeType.MAKE_VECTOR: "Vector",
    GraphNodeType.VECTOR_MATH: "Vector math",
    GraphNodeType.MERGE_MESHES: "Merge meshes",
    GraphNodeType.EXPORT_OBJ: "OBJ Export",
}


def search_node_types(query: str) -> list[GraphNodeType]:
    """Node types whose label contains the query (case-sensitive), in order."""
    return [t for t in GraphNodeType.all_types() if query in t.type_label()]