"""Static cloud provider reference data.

Used by the cloud cost scorer for:
- provider strengths / weaknesses and market presence
- hourly rate estimates per service type
- service feature and compliance certification lists
- weakness, use case, migration and lock-in report text
"""

from types import MappingProxyType

PROVIDER_PROFILES = MappingProxyType({
    "AWS": {
        "strengths": ("feature_completeness", "scalability", "reliability"),
        "weaknesses": ("cost_efficiency", "ease_of_use"),
        "market_share": 0.32,
        "regions": 25,
    },
    "Azure": {
        "strengths": ("enterprise_integration", "hybrid_cloud", "cost_efficiency"),
        "weaknesses": ("learning_curve",),
        "market_share": 0.20,
        "regions": 22,
    },
    "GCP": {
        "strengths": ("performance", "ai_ml", "cost_efficiency"),
        "weaknesses": ("feature_completeness", "enterprise_features"),
        "market_share": 0.09,
        "regions": 20,
    },
})

# USD per hour, keyed by service type then lowercase provider
HOURLY_RATES = MappingProxyType({
    "compute": {"aws": 0.10, "azure": 0.096, "gcp": 0.095},
    "storage": {"aws": 0.023, "azure": 0.020, "gcp": 0.020},
    "database": {"aws": 0.15, "azure": 0.14, "gcp": 0.13},
    "networking": {"aws": 0.09, "azure": 0.087, "gcp": 0.085},
})
DEFAULT_HOURLY_RATE = 0.10
DEFAULT_USAGE_HOURS = 100  # per month

# Share of the monthly estimate attributed to each cost component
COST_BREAKDOWN = MappingProxyType({"compute": 0.6, "storage": 0.2, "networking": 0.2})

PROVIDER_FEATURES = MappingProxyType({
    "AWS": ("ec2", "lambda", "s3", "rds", "vpc", "iam", "cloudwatch"),
    "Azure": ("vm", "functions", "blob", "sql", "vnet", "ad", "monitor"),
    "GCP": ("compute", "functions", "storage", "sql", "vpc", "iam", "monitoring"),
})

PROVIDER_COMPLIANCE = MappingProxyType({
    "AWS": ("SOC", "ISO27001", "GDPR", "HIPAA", "PCI-DSS"),
    "Azure": ("SOC", "ISO27001", "GDPR", "HIPAA", "FedRAMP"),
    "GCP": ("SOC", "ISO27001", "GDPR", "HIPAA", "PCI-DSS"),
})

# Raw 0-10 scores keyed on provider name
PROVIDER_PERFORMANCE = MappingProxyType({"GCP": 8, "AWS": 7})
PROVIDER_PORTABILITY = MappingProxyType({"AWS": 4, "Azure": 5})

# Known drawbacks listed as weaknesses regardless of scores
PROVIDER_CAVEATS = MappingProxyType({
    "AWS": (
        "Complex pricing structure",
        "Steep learning curve for beginners",
        "High vendor lock-in risk",
    ),
    "Azure": (
        "Less mature than AWS in some areas",
        "Documentation can be inconsistent",
    ),
    "GCP": (
        "Smaller market share and community",
        "Fewer third-party integrations",
        "Limited enterprise features compared to AWS",
    ),
})
FALLBACK_WEAKNESSES = (
    "Requires cloud expertise for optimization",
    "Ongoing management and monitoring needed",
)

# Compliance certification -> use case it unlocks
COMPLIANCE_USE_CASES = MappingProxyType({
    "HIPAA": "Healthcare applications",
    "FedRAMP": "Government projects",
})

# (vendor_lock_in raw upper bound, risk, migration time), first match wins
LOCK_IN_BANDS = ((5, "High", "6-12 months"), (7, "Medium", "3-6 months"))
LOW_LOCK_IN = ("Low", "1-3 months")

MIGRATION_RECOMMENDATIONS = (
    "Use containerization to reduce vendor lock-in",
    "Implement infrastructure as code for easier migration",
    "Choose services with open standards when possible",
)

MITIGATION_STRATEGIES = MappingProxyType({
    "High Risk": (
        "Use multi-cloud architecture",
        "Implement abstraction layers",
        "Regular migration testing",
    ),
    "Medium Risk": (
        "Monitor proprietary service usage",
        "Maintain portable data formats",
        "Document dependencies",
    ),
    "Low Risk": (
        "Continue with standard practices",
        "Periodic architecture review",
    ),
})
