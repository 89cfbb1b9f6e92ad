from fastapi import APIRouter
from typing import Dict, Any
import logging

from api.models.sizing_models import SizingRequest, SizingResponse, SegmentOutput
from api.utils.config import Config
from api.utils.errors import SizingError, ValidationError, handle_exception
from src.sanitary_pipe_sizing.config.sizing_config import (
    SizingConfig,
    SizingConfigError,
    load_sizing_config,
)
from src.sanitary_pipe_sizing.host.writer import SegmentResultWriter
from src.sanitary_pipe_sizing.sizer import SanitaryPipeSizer

logger = logging.getLogger("sanitary_sizing.api")

router = APIRouter()


def _resolve_config(overrides: Dict[str, Any] = None) -> SizingConfig:
    """Server config (SIZING_CONFIG_PATH) with request overrides on top."""
    base = load_sizing_config(Config.SIZING_CONFIG_PATH)
    if not overrides:
        return base
    merged = base.to_dict()
    table_overrides = overrides.get("tables")
    merged.update(overrides)
    # Individual tables and thresholds override the server tables one by one
    if isinstance(table_overrides, dict):
        merged["tables"] = {**base.tables.to_dict(), **table_overrides}
    return SizingConfig.from_dict(merged)


@router.post("/size", response_model=SizingResponse)
async def size_segments(request: SizingRequest):
    """
    Size a set of sanitary drainage segments.

    Segments are ordered by elevation, classified as vertical stacks or
    horizontal drains, sized from the IPC tables and forced to never reduce
    in the flow direction.
    """
    logger.info(f"Sizing request with {len(request.segments)} segments")
    try:
        ids = [segment.id for segment in request.segments]
        if len(ids) != len(set(ids)):
            raise ValidationError("Segment ids must be unique", field="segments")

        try:
            config = _resolve_config(request.config)
        except SizingConfigError as e:
            raise ValidationError(str(e), field="config")

        segments = [segment.to_segment() for segment in request.segments]
        writer = SegmentResultWriter(
            read_only_ids=[s.id for s in request.segments if s.read_only]
        )
        result = SanitaryPipeSizer(config).size(segments, writer)

        if not result.committed:
            raise SizingError("; ".join(result.errors))

        data = result.to_dict()
        data["segments"] = [
            SegmentOutput(id=s.id, load_units=s.load_units, diameter=s.diameter)
            for s in segments
        ]
        logger.info(result.summary())
        return SizingResponse(**data)

    except Exception as e:
        raise handle_exception(e, resource_type="sizing")


@router.get("/tables")
async def get_tables() -> Dict[str, Any]:
    """Return the capacity tables and thresholds in effect on this server."""
    try:
        config = load_sizing_config(Config.SIZING_CONFIG_PATH)
    except SizingConfigError as e:
        raise handle_exception(SizingError(str(e)))
    return config.to_dict()
