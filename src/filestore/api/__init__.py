# filestore HTTP layer
# Created: 2026-10-18
#
# FastAPI app factory (serve.py), shared dependencies (deps.py) and the
# /list, /upload, /get/, /delete routers (routes/).
