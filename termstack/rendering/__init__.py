"""Rendering backend — turns spans into terminal output.

Modules
-------
formatter
    ``SpanFormatter`` converts values into Rich ``Text`` spans.
renderer
    ``ConsoleRenderer`` measures spans and writes them into regions.
loop
    ``RenderLoop`` re-renders a view whenever it reports an update.
"""
