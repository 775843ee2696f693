import pytest

from polygraph.editor_state import EditorState
from polygraph.graph_types import AnyParameterId, GraphError
from polygraph.node_types import GraphNodeType


def _state_with_box_and_merge():
    state = EditorState()
    box = state.graph.add_node(GraphNodeType.MAKE_BOX.to_descriptor())
    merge = state.graph.add_node(GraphNodeType.MERGE_MESHES.to_descriptor())
    return state, box, merge


def test_new_state_is_empty():
    state = EditorState()
    assert list(state.graph.iter_nodes()) == []
    assert state.active_node is None
    assert state.connection_in_progress is None


def test_delete_active_node_clears_references():
    state, box, _ = _state_with_box_and_merge()
    state.active_node = box
    state.run_side_effect = box
    state.delete_node(box)
    assert box not in list(state.graph.iter_nodes())
    assert state.active_node is None
    assert state.run_side_effect is None


def test_delete_other_node_keeps_active():
    state, box, merge = _state_with_box_and_merge()
    state.active_node = merge
    state.delete_node(box)
    assert state.active_node == merge
    assert list(state.graph.iter_nodes()) == [merge]


def test_connect_from_output_to_input():
    state, box, merge = _state_with_box_and_merge()
    output = state.graph[box].get_output("out_mesh")
    input_id = state.graph[merge].get_input("A")
    state.start_connection(box, AnyParameterId(output))
    assert state.end_connection(AnyParameterId(input_id)) is True
    assert state.graph.connection(input_id) == output
    assert state.connection_in_progress is None


def test_connect_from_input_to_output():
    state, box, merge = _state_with_box_and_merge()
    output = state.graph[box].get_output("out_mesh")
    input_id = state.graph[merge].get_input("B")
    state.start_connection(merge, AnyParameterId(input_id))
    assert state.end_connection(AnyParameterId(output)) is True
    assert state.graph.connection(input_id) == output


def test_input_to_input_does_not_connect():
    state, box, merge = _state_with_box_and_merge()
    a = state.graph[merge].get_input("A")
    origin = state.graph[box].get_input("origin")
    state.start_connection(merge, AnyParameterId(a))
    assert state.end_connection(AnyParameterId(origin)) is False
    assert list(state.graph.iter_connections()) == []


def test_end_without_start_raises():
    state, box, _ = _state_with_box_and_merge()
    output = state.graph[box].get_output("out_mesh")
    with pytest.raises(ValueError):
        state.end_connection(AnyParameterId(output))


def test_disconnect_picks_up_the_output():
    state, box, merge = _state_with_box_and_merge()
    output = state.graph[box].get_output("out_mesh")
    input_id = state.graph[merge].get_input("A")
    state.graph.add_connection(output, input_id)
    assert state.disconnect(input_id) == output
    assert state.graph.connection(input_id) is None
    assert state.connection_in_progress == (merge, AnyParameterId(output))


def test_disconnect_unconnected_input_raises():
    state, _, merge = _state_with_box_and_merge()
    input_id = state.graph[merge].get_input("A")
    with pytest.raises(GraphError):
        state.disconnect(input_id)