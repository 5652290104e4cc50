"""Drawing engine: symbol tables, rasterization, routing and junction fixup."""
