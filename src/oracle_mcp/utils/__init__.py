"""
Utils Module - Infrastructure Utilities and Support Functions
==============================================================

Modules:
    logger: Console logging plus optional JSON log files with rotation
    http_logger: httpx event hooks that log Responses API traffic
    client_factory: Shared httpx.AsyncClient and AsyncOpenAI construction
    json_utils: Compact JSON helpers and bounded payload previews
    file_utils: Async file reading into FileContext entries
"""
