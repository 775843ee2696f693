"""Saving and loading the editor's graph as a JSON document."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from polygraph.editor_state import EditorState
from polygraph.graph_types import (
    DataType,
    EnumValue,
    Graph,
    InputId,
    InputParam,
    InputParamKind,
    InputParamValue,
    MinMaxScalar,
    NewFileValue,
    Node,
    NodeId,
    NoValue,
    OutputId,
    OutputParam,
    ScalarValue,
    SelectionValue,
    VectorValue,
)
from polygraph.vecmath import Vec3

_FORMAT_VERSION = 1


class SerializationError(ValueError):
    """Raised when a saved file cannot be understood."""


def _encode_value(value: InputParamValue) -> dict[str, Any]:
    match value:
        case VectorValue(value=vector):
            return {"type": "Vector", "value": list(vector)}
        case ScalarValue(value=scalar):
            return {"type": "Scalar", "value": scalar}
        case SelectionValue(text=text, selection=selection):
            return {
                "type": "Selection",
                "text": text,
                "selection": None if selection is None else list(selection),
            }
        case NoValue():
            return {"type": "None"}
        case EnumValue(values=values, selection=selection):
            return {"type": "Enum", "values": list(values), "selection": selection}
        case NewFileValue(path=path):
            return {"type": "NewFile", "path": None if path is None else str(path)}
        case _:
            raise SerializationError(f"Cannot save parameter value {value!r}")


def _decode_value(data: dict[str, Any]) -> InputParamValue:
    match data["type"]:
        case "Vector":
            x, y, z = data["value"]
            return VectorValue(Vec3(float(x), float(y), float(z)))
        case "Scalar":
            return ScalarValue(float(data["value"]))
        case "Selection":
            selection = data["selection"]
            return SelectionValue(
                str(data["text"]),
                None if selection is None else tuple(int(i) for i in selection),
            )
        case "None":
            return NoValue()
        case "Enum":
            selection = data["selection"]
            return EnumValue(
                tuple(str(v) for v in data["values"]),
                None if selection is None else int(selection),
            )
        case "NewFile":
            path = data["path"]
            return NewFileValue(None if path is None else Path(path))
        case other:
            raise SerializationError(f"Unknown parameter value type {other!r}")


def _encode_graph(graph: Graph) -> dict[str, Any]:
    return {
        "next_key": graph.next_key,
        "nodes": [
            {
                "id": node.id.index,
                "label": node.label,
                "op_name": node.op_name,
                "inputs": [[name, i.index] for name, i in node.named_inputs],
                "outputs": [[name, o.index] for name, o in node.named_outputs],
                "is_executable": node.is_executable,
            }
            for node in graph.nodes.values()
        ],
        "inputs": [
            {
                "id": param.id.index,
                "typ": param.typ.value,
                "value": _encode_value(param.value),
                "kind": param.kind.value,
                "node": param.node.index,
                "metadata": [{"min": m.min, "max": m.max} for m in param.metadata],
            }
            for param in graph.inputs.values()
        ],
        "outputs": [
            {"id": param.id.index, "node": param.node.index, "typ": param.typ.value}
            for param in graph.outputs.values()
        ],
        "connections": [[i.index, o.index] for i, o in graph.connections.items()],
    }


def _decode_graph(data: dict[str, Any]) -> Graph:
    nodes = {}
    for item in data["nodes"]:
        node_id = NodeId(int(item["id"]))
        nodes[node_id] = Node(
            id=node_id,
            label=str(item["label"]),
            op_name=str(item["op_name"]),
            named_inputs=[(str(n), InputId(int(i))) for n, i in item["inputs"]],
            named_outputs=[(str(n), OutputId(int(o))) for n, o in item["outputs"]],
            is_executable=bool(item["is_executable"]),
        )
    inputs = {}
    for item in data["inputs"]:
        input_id = InputId(int(item["id"]))
        inputs[input_id] = InputParam(
            id=input_id,
            typ=DataType(item["typ"]),
            value=_decode_value(item["value"]),
            kind=InputParamKind(item["kind"]),
            node=NodeId(int(item["node"])),
            metadata=[
                MinMaxScalar(float(m["min"]), float(m["max"])) for m in item["metadata"]
            ],
        )
    outputs = {}
    for item in data["outputs"]:
        output_id = OutputId(int(item["id"]))
        outputs[output_id] = OutputParam(
            id=output_id, node=NodeId(int(item["node"])), typ=DataType(item["typ"])
        )
    connections = {InputId(int(i)): OutputId(int(o)) for i, o in data["connections"]}
    return Graph(
        nodes=nodes,
        inputs=inputs,
        outputs=outputs,
        connections=connections,
        next_key=int(data["next_key"]),
    )


def save(editor_state: EditorState, path: str | os.PathLike[str]) -> None:
    """Write the graph and the active node to `path`."""
    active = editor_state.active_node
    document = {
        "version": _FORMAT_VERSION,
        "graph": _encode_graph(editor_state.graph),
        "active_node": None if active is None else active.index,
    }
    Path(path).write_text(json.dumps(document, indent=2), encoding="utf-8")


def load(path: str | os.PathLike[str]) -> EditorState:
    """Read a saved file into a fresh editor state."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        document = json.loads(text)
        version = document["version"]
        if version != _FORMAT_VERSION:
            raise SerializationError(f"Unsupported file version {version!r}")
        graph = _decode_graph(document["graph"])
        active = document["active_node"]
        active_node = None if active is None else NodeId(int(active))
    except SerializationError:
        raise
    except (KeyError, TypeError, ValueError) as err:
        raise SerializationError(f"Malformed editor file: {err}") from err
    return EditorState(graph=graph, active_node=active_node)