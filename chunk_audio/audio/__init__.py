"""Per-asset audio filter chains for chunked renders.

Everything here is pure string synthesis; nothing shells out to ffmpeg:
- trim_tempo orders atrim/atempo and computes the audible duration
- volume/atempo are the default expression generators
- filter_graph assembles the chain, padding holds the pad directives
"""
