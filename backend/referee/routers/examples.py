"""Example payloads for each comparison endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/apis")
async def example_apis():
    return {
        "example": {
            "apis": [
                {
                    "name": "REST API",
                    "endpoint": "https://jsonplaceholder.typicode.com/posts",
                    "type": "REST",
                    "rateLimits": {"requests": 1000, "window": "hour"},
                    "pricing": {"free": True, "cost": 0},
                },
                {
                    "name": "GraphQL API",
                    "endpoint": "https://api.github.com/graphql",
                    "type": "GraphQL",
                    "rateLimits": {"requests": 5000, "window": "hour"},
                    "pricing": {"free": False, "cost": 25},
                },
            ],
            "options": {
                "criteria": ["performance", "cost", "ease_of_use"],
                "constraints": {
                    "maxCost": 50,
                    "weights": {"performance": 0.4, "cost": 0.3, "ease_of_use": 0.3},
                },
            },
        }
    }


@router.get("/cloud")
async def example_cloud():
    return {
        "example": {
            "services": [
                {"name": "AWS EC2", "provider": "AWS", "type": "compute", "estimatedUsage": 100},
                {"name": "Azure VM", "provider": "Azure", "type": "compute", "estimatedUsage": 100},
                {"name": "Google Compute Engine", "provider": "GCP", "type": "compute", "estimatedUsage": 100},
            ],
            "options": {
                "criteria": ["cost_efficiency", "performance", "ease_of_use"],
                "constraints": {"maxMonthlyCost": 200, "requiredCompliance": ["SOC", "GDPR"]},
            },
        }
    }


@router.get("/tech-stack")
async def example_tech_stack():
    return {
        "example": {
            "projectType": "web_app",
            "teamExperience": "intermediate",
            "timeline": "normal",
            "budget": "medium",
            "teamSize": 4,
        }
    }
