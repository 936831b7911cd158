"""Comparison router — general, API, cloud, and tech-stack comparisons."""

import logging

from fastapi import APIRouter, HTTPException

from referee.schemas.compare import (
    ApiCompareRequest,
    CloudCompareRequest,
    GeneralCompareRequest,
    TechStackRequest,
)
from referee.services.decision.engine import decision_engine
from referee.services.decision.errors import InputError
from referee.services.scorers import general_scorer
from referee.services.scorers.api_health import ApiHealthScorer
from referee.services.scorers.base import DomainScorer
from referee.services.scorers.cloud import CloudCostScorer
from referee.services.scorers.tech_stack import (
    TechStackScorer,
    build_stack_options,
    filter_stacks,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _run(
    options, criteria, constraints, scorer: DomainScorer, label: str, context: dict | None = None
) -> dict:
    """Evaluate, add the domain's notes, and map engine errors to HTTP responses."""
    try:
        result = await decision_engine.evaluate(
            options, criteria or list(scorer.default_criteria), constraints, scorer=scorer
        )
        return scorer.render(result, context)
    except InputError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    except Exception as e:
        logger.error(f"{label} comparison failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail={"error": f"Failed to compare {label}", "message": str(e)},
        )


@router.post("/compare/general")
async def compare_general(req: GeneralCompareRequest):
    """Compare arbitrary options on caller-supplied criteria."""
    constraints = req.constraints.to_engine() if req.constraints else None
    return await _run(req.options, req.criteria, constraints, general_scorer(), "options")


@router.post("/compare/apis")
async def compare_apis(req: ApiCompareRequest):
    """Compare APIs using live health probes."""
    opts = req.options
    constraints = opts.constraints.to_engine() if opts and opts.constraints else None
    criteria = opts.criteria if opts else None
    return await _run(req.apis, criteria, constraints, ApiHealthScorer(), "APIs")


@router.post("/compare/cloud")
async def compare_cloud(req: CloudCompareRequest):
    """Compare cloud services using provider profiles and rate tables."""
    opts = req.options
    constraints = opts.constraints.to_engine() if opts and opts.constraints else None
    criteria = opts.criteria if opts else None
    return await _run(req.services, criteria, constraints, CloudCostScorer(), "cloud services")


@router.post("/recommend/tech-stack")
async def recommend_tech_stack(req: TechStackRequest):
    """Recommend a tech stack from the catalog for the given requirements."""
    requirements = req.model_dump()
    candidates = filter_stacks(requirements)
    if len(candidates) < 2:
        # too few matches to compare; widen back to the project-type filter alone
        candidates = filter_stacks({"projectType": req.projectType})
    constraints = {"weights": req.weights} if req.weights else None
    return await _run(
        build_stack_options(candidates),
        req.criteria,
        constraints,
        TechStackScorer(),
        "tech stacks",
        context=requirements,
    )
