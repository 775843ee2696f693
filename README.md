# polygraph

polygraph describes procedural meshes as a node graph. Each node is an
operation: build a box or a quad, bevel edges, extrude faces, chamfer
vertices, do vector arithmetic, merge meshes, or export to OBJ. The graph is
compiled into a short program of typed instructions (PolyAsm). When the
program runs, it hands the mesh work to a mesh backend that you supply.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `polygraph.graph_types`: the `Graph`. It holds `Node`s, their
  `InputParam`s and `OutputParam`s, and connections from inputs to outputs.
  - `Graph.add_node(descriptor)` adds a node from a `NodeDescriptor`.
  - `remove_node`, `add_connection`, `remove_connection` and `connection`
    edit and query the graph.
  - Indexing with `graph[node_id]`, `graph[input_id]` or `graph[output_id]`
    raises `GraphError` for an id that is not in the graph.
  - `parse_selection("0,2,5")` parses a comma-separated list of indices. It
    returns `None` when any part is invalid.
- `polygraph.node_types`: `GraphNodeType` lists every kind of node.
  - `to_descriptor()` builds the inputs and outputs a new node of that kind
    starts with.
  - `type_label()` and `op_name()` give its display label and op name.
  - `search_node_types(query)` returns the kinds whose label contains
    `query`.
- `polygraph.poly_asm`: `PolyAsmProgram`, its typed memory and its
  instructions.
  - Memory is addressed with `MemAddr`. Use `mem_alloc_raw`, `mem_reserve`,
    `mem_store`, `mem_fetch` and `mem_retrieve`.
  - The instructions are `MakeCube`, `MakeQuad`, `BevelEdges`,
    `ExtrudeFaces`, `ChamferVertices`, `MakeVector`, `VectorAdd`,
    `VectorSub`, `MergeMeshes` and `ExportObj`.
  - Mesh instructions call a `MeshBackend`, passed as
    `PolyAsmProgram(backend=...)`.
  - Errors raise `PolyAsmError`.
- `polygraph.graph_compiler`: `compile_graph(graph, final_node)` emits the
  instructions that compute `final_node` and every node it depends on.
  - Each node is emitted once, after its inputs.
  - Unconnected inputs become constants in the program's memory.
  - Problems raise `CompileError`, for example a missing connection, an unset
    file path, an invalid selection or an unknown op.
- `polygraph.outputs_cache`: `OutputsCache` is used during compilation. It
  maps each output parameter to the address that will hold its value.
- `polygraph.editor_state`: `EditorState` holds an editing session: the
  graph, the active node, a pending side-effect node, pending node positions,
  a path to load, and any connection being dragged.
  - `delete_node`, `start_connection`, `end_connection` and `disconnect` make
    the graph edits that these interactions trigger.
- `polygraph.serialization`: `save(editor_state, path)` writes the graph and
  the active node to a JSON file. `load(path)` reads it back into a new
  `EditorState`. A malformed file raises `SerializationError`.
- `polygraph.color_hex`: `color_from_hex` and `color_to_hex` convert between
  `#rrggbb` / `#rrggbbaa` strings and `Color`.
- `polygraph.input`: `InputSystem`, `MouseInput` and `Input` track mouse
  state from events.
  - The events are `CursorMoved`, `MouseWheel` and `MouseButtonEvent`.
  - The state covers buttons held, just pressed and just released, plus the
    cursor position, the cursor delta and the wheel delta for each frame.
- `polygraph.vecmath`: the `Vec2` and `Vec3` value types.
  - `Vec3.to_ord()` gives a hashable, totally ordered `Vec3Ord` key.

## Building and compiling a graph

```python
from polygraph.editor_state import EditorState
from polygraph.graph_compiler import compile_graph
from polygraph.node_types import GraphNodeType

state = EditorState()
box = state.graph.add_node(GraphNodeType.MAKE_BOX.to_descriptor())
state.active_node = box

program = compile_graph(state.graph, box)
print(program.instructions)   # (MakeCube(...),)
```

## Running a program with a mesh backend

```python
from polygraph.poly_asm import MakeCube, MemAddr, PolyAsmProgram
from polygraph.vecmath import Vec3

program = PolyAsmProgram(backend=my_backend)   # any object implementing MeshBackend
origin = MemAddr.from_raw_checked(program, program.mem_alloc_raw(Vec3.ZERO), "origin", Vec3)
size = MemAddr.from_raw_checked(program, program.mem_alloc_raw(Vec3.ONE), "size", Vec3)
program.add_operation(MakeCube(origin=origin, size=size, out_mesh=program.mem_reserve(object)))
mesh = program.execute()
```

`execute()` returns the last mesh produced. It raises `PolyAsmError` if no
instruction produced a mesh.

## Colours

```python
from polygraph.color_hex import color_from_hex, color_to_hex

color = color_from_hex("#5577AA")
assert color_to_hex(color) == "#5577aa"
```

## What this package does not do

- It has no mesh data structure or geometry operations. Boxes, quads,
  bevels, extrusions, chamfers, merging and OBJ export all come from the
  `MeshBackend` you provide.
- `compile_graph` returns a program without a backend. Running its mesh
  instructions raises `PolyAsmError`, so build a program with a backend
  yourself, as shown above.
- It has no window, renderer or graphical node editor, and no command-line
  program. `EditorState` and `polygraph.input` model the editor's state and
  input; they do not draw anything.