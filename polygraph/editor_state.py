"""The state of the node editor and the edits that user interaction triggers."""

from __future__ import annotations

from dataclasses import dataclass, field

from polygraph.graph_types import AnyParameterId, Graph, GraphError, InputId, NodeId, OutputId
from polygraph.vecmath import Vec2


@dataclass
class EditorState:
    """The graph being edited plus the editor's transient interaction state."""

    graph: Graph = field(default_factory=Graph)
    # A port the user is dragging a connection from.
    connection_in_progress: tuple[NodeId, AnyParameterId] | None = None
    # The node whose result is compiled and shown.
    active_node: NodeId | None = None
    # A node whose side effect runs at the start of the next frame.
    run_side_effect: NodeId | None = None
    # Nodes to be moved to the given positions on the next frame.
    node_position_ops: dict[NodeId, Vec2] = field(default_factory=dict)
    # A file path to load on the next frame.
    load_op: str | None = None

    def delete_node(self, node_id: NodeId) -> None:
        """Remove a node, dropping any reference the editor keeps to it."""
        self.graph.remove_node(node_id)
        if self.active_node == node_id:
            self.active_node = None
        if self.run_side_effect == node_id:
            self.run_side_effect = None

    def start_connection(self, node_id: NodeId, param: AnyParameterId) -> None:
        self.connection_in_progress = (node_id, param)

    def end_connection(self, param: AnyParameterId) -> bool:
        """Finish a drag on `param`; connect if it pairs an input with an output."""
        if self.connection_in_progress is None:
            raise ValueError("Cannot end drag without in-progress connection.")
        _, start = self.connection_in_progress
        self.connection_in_progress = None
        if start.is_input and not param.is_input:
            self.graph.add_connection(param.id, start.id)
            return True
        if not start.is_input and param.is_input:
            self.graph.add_connection(start.id, param.id)
            return True
        return False

    def disconnect(self, input_id: InputId) -> OutputId:
        """Detach a connected input and pick the loose end up as a new drag."""
        output = self.graph.connection(input_id)
        if output is None:
            raise GraphError(f"Input {input_id!r} has no connection")
        other_node = self.graph.get_input(input_id).node
        self.graph.remove_connection(input_id)
        self.connection_in_progress = (other_node, AnyParameterId(output))
        return output