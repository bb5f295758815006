"""
FastAPI application exposing one tracking engine.
Ticks are serialized with a lock; every read returns an immutable snapshot.
"""

import time
import logging
import threading
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from ..config import EngineConfig
from ..engine import TrackingEngine
from ..detection import RejectedTickError
from .schemas import (
    TracksResponse, TickRequest, TickResponse,
    CountsResponse, RoiRequest, RoiResponse, HealthResponse,
)

logger = logging.getLogger(__name__)


def create_app(engine: Optional[TrackingEngine] = None) -> FastAPI:
    """Build an app bound to one engine."""
    state = {
        'engine': engine or TrackingEngine(EngineConfig()),
        'lock': threading.Lock(),
        'start_time': time.time(),
    }

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting ROI Tracking API...")
        state['start_time'] = time.time()
        yield
        logger.info("Shutting down ROI Tracking API...")

    app = FastAPI(
        title="ROI Tracking API",
        description="Centroid tracking of detection batches with ROI enter/exit counting",
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.engine_state = state

    @app.get("/api/health", response_model=HealthResponse)
    def health_check():
        """Health check endpoint."""
        eng = state['engine']
        return HealthResponse(
            status="healthy",
            uptime=time.time() - state['start_time'],
            tick_count=eng.tick_count,
            active_tracks=len(eng.tracks),
            config=eng.config.to_dict(),
        )

    @app.post("/api/tick", response_model=TickResponse)
    def tick(req: TickRequest):
        """Feed one detection batch to the engine."""
        with state['lock']:
            try:
                result = state['engine'].tick(req.detections, req.timestamp, req.polygon)
            except RejectedTickError as e:
                logger.warning(f"Rejected tick at {req.timestamp}: {e}")
                raise HTTPException(status_code=422, detail=str(e))
        return result.to_dict()

    @app.get("/api/tracks", response_model=TracksResponse)
    def get_tracks():
        """Get the current track snapshot."""
        eng = state['engine']
        return {
            'tracks': [t.to_dict() for t in eng.tracks],
            'state': eng.state.value,
        }

    @app.get("/api/counts", response_model=CountsResponse)
    def get_counts():
        """Get cumulative ROI counters."""
        return state['engine'].counters.to_dict()

    @app.get("/api/roi", response_model=RoiResponse)
    def get_roi():
        roi = state['engine'].roi
        return {'polygon': roi.to_list(), 'defined': roi.is_defined}

    @app.put("/api/roi", response_model=RoiResponse)
    def set_roi(req: RoiRequest):
        """Replace the engine's default ROI."""
        with state['lock']:
            try:
                state['engine'].set_roi(req.polygon)
            except ValueError as e:
                raise HTTPException(status_code=422, detail=str(e))
            roi = state['engine'].roi
        return {'polygon': roi.to_list(), 'defined': roi.is_defined}

    @app.post("/api/reset", response_model=CountsResponse)
    def reset():
        """Clear tracks and counters."""
        with state['lock']:
            state['engine'].reset()
        return state['engine'].counters.to_dict()

    return app


app = create_app()


def run_api(host: str = "0.0.0.0", port: int = 8000, api_app: Optional[FastAPI] = None):
    """Run the API server, on the module app unless one is given."""
    import uvicorn
    uvicorn.run(api_app or app, host=host, port=port)
