"""The node graph: nodes, their typed input and output parameters, and connections."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, Union

from polygraph.vecmath import Vec3


class GraphError(LookupError):
    """Raised when a node, parameter or id cannot be found."""


@dataclass(frozen=True, order=True, repr=False)
class _Key:
    index: int

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.index})"


class NodeId(_Key):
    """Identifies a node in a graph."""


class InputId(_Key):
    """Identifies an input parameter in a graph."""


class OutputId(_Key):
    """Identifies an output parameter in a graph."""


@dataclass(frozen=True)
class AnyParameterId:
    """Either an input or an output parameter id."""

    id: InputId | OutputId

    def __post_init__(self) -> None:
        if not isinstance(self.id, (InputId, OutputId)):
            raise TypeError(f"{self.id!r} is not a parameter id")

    @property
    def is_input(self) -> bool:
        return isinstance(self.id, InputId)

    def assume_input(self) -> InputId:
        if isinstance(self.id, InputId):
            return self.id
        raise GraphError(f"{self.id!r} is not an InputId")

    def assume_output(self) -> OutputId:
        if isinstance(self.id, OutputId):
            return self.id
        raise GraphError(f"{self.id!r} is not an OutputId")


class DataType(Enum):
    VECTOR = "Vector"
    SCALAR = "Scalar"
    SELECTION = "Selection"
    MESH = "Mesh"
    ENUM = "Enum"
    # The path to a (possibly new) file where exported contents will be saved.
    NEW_FILE = "NewFile"


class InputParamKind(Enum):
    """Whether an input takes connections, constants, or both."""

    CONNECTION_ONLY = "ConnectionOnly"
    CONSTANT_ONLY = "ConstantOnly"
    # Connections take precedence over the constant value.
    CONNECTION_OR_CONSTANT = "ConnectionOrConstant"


@dataclass(frozen=True)
class MinMaxScalar:
    """Bounds for a scalar parameter."""

    min: float
    max: float


@dataclass(frozen=True)
class VectorValue:
    value: Vec3


@dataclass(frozen=True)
class ScalarValue:
    value: float


_UINT = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1


def parse_selection(text: str) -> tuple[int, ...] | None:
    """Parse comma-separated unsigned 32-bit indices; None if any part is invalid."""
    indices = []
    for part in text.split(","):
        if not _UINT.fullmatch(part):
            return None
        number = int(part)
        if number > _U32_MAX:
            return None
        indices.append(number)
    return tuple(indices)


@dataclass(frozen=True)
class SelectionValue:
    text: str
    selection: tuple[int, ...] | None

    @classmethod
    def from_text(cls, text: str) -> SelectionValue:
        """Build a selection from user text, parsing the indices."""
        return cls(text, parse_selection(text))


@dataclass(frozen=True)
class NoValue:
    """For parameters that only accept connections."""


@dataclass(frozen=True)
class EnumValue:
    values: tuple[str, ...]
    selection: int | None = None


@dataclass(frozen=True)
class NewFileValue:
    path: Path | None = None


InputParamValue = Union[
    VectorValue, ScalarValue, SelectionValue, NoValue, EnumValue, NewFileValue
]


@dataclass
class InputParam:
    id: InputId
    typ: DataType
    value: InputParamValue
    kind: InputParamKind
    node: NodeId
    metadata: list[MinMaxScalar] = field(default_factory=list)

    @property
    def scalar_range(self) -> tuple[float, float]:
        """The bounds for a scalar value, unbounded unless metadata says otherwise."""
        low, high = -math.inf, math.inf
        for meta in self.metadata:
            if isinstance(meta, MinMaxScalar):
                low, high = meta.min, meta.max
        return low, high


@dataclass
class OutputParam:
    id: OutputId
    node: NodeId
    typ: DataType


@dataclass
class Node:
    id: NodeId
    label: str
    op_name: str
    named_inputs: list[tuple[str, InputId]] = field(default_factory=list)
    named_outputs: list[tuple[str, OutputId]] = field(default_factory=list)
    # Executable nodes run some code when their "Run" button is clicked.
    is_executable: bool = False

    def inputs(self, graph: Graph) -> Iterator[InputParam]:
        return (graph.get_input(i) for i in self.input_ids())

    def outputs(self, graph: Graph) -> Iterator[OutputParam]:
        return (graph.get_output(o) for o in self.output_ids())

    def input_ids(self) -> Iterator[InputId]:
        return (param_id for _, param_id in self.named_inputs)

    def output_ids(self) -> Iterator[OutputId]:
        return (param_id for _, param_id in self.named_outputs)

    def get_input(self, name: str) -> InputId:
        for param_name, param_id in self.named_inputs:
            if param_name == name:
                return param_id
        raise GraphError(f"Node {self.id!r} has no parameter named {name}")

    def get_output(self, name: str) -> OutputId:
        for param_name, param_id in self.named_outputs:
            if param_name == name:
                return param_id
        raise GraphError(f"Node {self.id!r} has no parameter named {name}")

    def can_be_enabled(self, graph: Graph) -> bool:
        """Whether this node outputs a mesh and so can be shown."""
        return any(output.typ is DataType.MESH for output in self.outputs(graph))


@dataclass(frozen=True)
class VectorInput:
    default: Vec3


@dataclass(frozen=True)
class MeshInput:
    pass


@dataclass(frozen=True)
class SelectionInput:
    pass


@dataclass(frozen=True)
class ScalarInput:
    default: float
    min: float
    max: float


@dataclass(frozen=True)
class EnumInput:
    values: tuple[str, ...]


@dataclass(frozen=True)
class NewFileInput:
    pass


InputDescriptor = Union[
    VectorInput, MeshInput, SelectionInput, ScalarInput, EnumInput, NewFileInput
]


@dataclass(frozen=True)
class OutputDescriptor:
    data_type: DataType


@dataclass
class NodeDescriptor:
    op_name: str
    label: str
    inputs: list[tuple[str, InputDescriptor]] = field(default_factory=list)
    outputs: list[tuple[str, OutputDescriptor]] = field(default_factory=list)
    is_executable: bool = False


def _input_parts(
    descriptor: InputDescriptor,
) -> tuple[DataType, InputParamValue, InputParamKind, list[MinMaxScalar]]:
    match descriptor:
        case VectorInput(default=default):
            return (
                DataType.VECTOR,
                VectorValue(default),
                InputParamKind.CONNECTION_OR_CONSTANT,
                [],
            )
        case MeshInput():
            return DataType.MESH, NoValue(), InputParamKind.CONNECTION_ONLY, []
        case SelectionInput():
            return (
                DataType.SELECTION,
                SelectionValue("", ()),
                InputParamKind.CONNECTION_OR_CONSTANT,
                [],
            )
        case ScalarInput(default=default, min=low, max=high):
            return (
                DataType.SCALAR,
                ScalarValue(default),
                InputParamKind.CONNECTION_OR_CONSTANT,
                [MinMaxScalar(low, high)],
            )
        case EnumInput(values=values):
            return (
                DataType.ENUM,
                EnumValue(tuple(values), None),
                InputParamKind.CONSTANT_ONLY,
                [],
            )
        case NewFileInput():
            return (
                DataType.NEW_FILE,
                NewFileValue(None),
                InputParamKind.CONSTANT_ONLY,
                [],
            )
        case _:
            raise TypeError(f"Unknown input descriptor: {descriptor!r}")


@dataclass
class Graph:
    """Nodes with their parameters, and input-to-output connections."""

    nodes: dict[NodeId, Node] = field(default_factory=dict)
    inputs: dict[InputId, InputParam] = field(default_factory=dict)
    outputs: dict[OutputId, OutputParam] = field(default_factory=dict)
    # Maps each connected input to the output of its predecessor that produces it.
    connections: dict[InputId, OutputId] = field(default_factory=dict)
    next_key: int = 0

    def _allocate(self, key_type: type[_Key]) -> _Key:
        key = key_type(self.next_key)
        self.next_key += 1
        return key

    def __getitem__(self, key: NodeId | InputId | OutputId):
        match key:
            case NodeId():
                arena = self.nodes
            case InputId():
                arena = self.inputs
            case OutputId():
                arena = self.outputs
            case _:
                raise TypeError(f"Cannot index a graph with {key!r}")
        try:
            return arena[key]
        except KeyError:
            raise GraphError(
                f"{type(key).__name__} index error for {key!r}. "
                "Has the value been deleted?"
            ) from None

    def add_node(self, descriptor: NodeDescriptor) -> NodeId:
        node_id = self._allocate(NodeId)
        node = Node(
            id=node_id,
            label=descriptor.label,
            op_name=descriptor.op_name,
            is_executable=descriptor.is_executable,
        )
        self.nodes[node_id] = node

        for name, input_descriptor in descriptor.inputs:
            typ, value, kind, metadata = _input_parts(input_descriptor)
            input_id = self._allocate(InputId)
            self.inputs[input_id] = InputParam(
                id=input_id,
                typ=typ,
                value=value,
                kind=kind,
                node=node_id,
                metadata=metadata,
            )
            node.named_inputs.append((name, input_id))

        for name, output_descriptor in descriptor.outputs:
            output_id = self._allocate(OutputId)
            self.outputs[output_id] = OutputParam(
                id=output_id, node=node_id, typ=output_descriptor.data_type
            )
            node.named_outputs.append((name, output_id))

        return node_id

    def remove_node(self, node_id: NodeId) -> None:
        node = self[node_id]
        self.connections = {
            i: o
            for i, o in self.connections.items()
            if not (self[o].node == node_id or self[i].node == node_id)
        }
        for input_id in node.input_ids():
            del self.inputs[input_id]
        for output_id in node.output_ids():
            del self.outputs[output_id]
        del self.nodes[node_id]

    def remove_connection(self, input_id: InputId) -> OutputId | None:
        return self.connections.pop(input_id, None)

    def iter_nodes(self) -> Iterator[NodeId]:
        yield from tuple(self.nodes)

    def add_connection(self, output: OutputId, input: InputId) -> None:
        self.connections[input] = output

    def iter_connections(self) -> Iterator[tuple[InputId, OutputId]]:
        yield from tuple(self.connections.items())

    def connection(self, input: InputId) -> OutputId | None:
        return self.connections.get(input)

    def any_param_type(self, param: AnyParameterId) -> DataType:
        found = (
            self.inputs.get(param.id)
            if isinstance(param.id, InputId)
            else self.outputs.get(param.id)
        )
        if found is None:
            raise GraphError(f"Invalid parameter id: {param!r}")
        return found.typ

    def get_input(self, input: InputId) -> InputParam:
        return self[input]

    def get_output(self, output: OutputId) -> OutputParam:
        return self[output]