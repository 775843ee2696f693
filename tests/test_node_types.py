from polygraph.graph_types import (
    DataType,
    EnumValue,
    Graph,
    InputParamKind,
    MinMaxScalar,
    NoValue,
    VectorValue,
)
from polygraph.node_types import GraphNodeType, search_node_types
from polygraph.vecmath import Vec3


def test_all_types_in_declaration_order():
    types = list(GraphNodeType.all_types())
    assert types[0] is GraphNodeType.MAKE_BOX
    assert types[-1] is GraphNodeType.EXPORT_OBJ
    assert len(types) == len(set(types)) == len(GraphNodeType)


def test_labels_and_op_names():
    assert GraphNodeType.MAKE_BOX.type_label() == "Box"
    assert GraphNodeType.EXPORT_OBJ.type_label() == "OBJ Export"
    assert GraphNodeType.VECTOR_MATH.op_name() == "VectorMath"


def test_descriptor_carries_label_and_op_name():
    for node_type in GraphNodeType.all_types():
        descriptor = node_type.to_descriptor()
        assert descriptor.label == node_type.type_label()
        assert descriptor.op_name == node_type.op_name()


def test_only_export_is_executable():
    executable = [t for t in GraphNodeType if t.to_descriptor().is_executable]
    assert executable == [GraphNodeType.EXPORT_OBJ]
    assert GraphNodeType.EXPORT_OBJ.to_descriptor().outputs == []


def test_make_box_added_to_graph():
    graph = Graph()
    node_id = graph.add_node(GraphNodeType.MAKE_BOX.to_descriptor())
    node = graph[node_id]
    origin = graph[node.get_input("origin")]
    size = graph[node.get_input("size")]
    assert origin.value == VectorValue(Vec3.ZERO)
    assert size.value == VectorValue(Vec3.ONE)
    assert node.can_be_enabled(graph)


def test_bevel_inputs():
    graph = Graph()
    node = graph[graph.add_node(GraphNodeType.BEVEL_EDGES.to_descriptor())]
    in_mesh = graph[node.get_input("in_mesh")]
    amount = graph[node.get_input("amount")]
    assert in_mesh.value == NoValue()
    assert in_mesh.kind is InputParamKind.CONNECTION_ONLY
    assert amount.metadata == [MinMaxScalar(0.0, 1.0)]


def test_vector_math_enum_and_output():
    graph = Graph()
    node = graph[graph.add_node(GraphNodeType.VECTOR_MATH.to_descriptor())]
    op = graph[node.get_input("vec_op")]
    assert op.value == EnumValue(("ADD", "SUB"), None)
    assert op.kind is InputParamKind.CONSTANT_ONLY
    assert graph[node.get_output("out_vec")].typ is DataType.VECTOR
    assert not node.can_be_enabled(graph)


def test_export_node_cannot_be_enabled():
    graph = Graph()
    node = graph[graph.add_node(GraphNodeType.EXPORT_OBJ.to_descriptor())]
    assert graph[node.get_input("export_path")].typ is DataType.NEW_FILE
    assert not node.can_be_enabled(graph)


def test_search_node_types():
    assert search_node_types("Vector") == [
        GraphNodeType.MAKE_VECTOR,
        GraphNodeType.VECTOR_MATH,
    ]
    assert search_node_types("") == list(GraphNodeType)
    assert search_node_types("box") == []