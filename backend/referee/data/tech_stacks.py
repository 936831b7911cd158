"""Static tech stack catalog.

Each entry lists the stack's technologies, qualitative strengths and
weaknesses, and its learning curve / community / job market ratings. The
tech-stack scorer maps these ratings to 0-10 scores.
"""

from types import MappingProxyType

TECH_STACKS = MappingProxyType({
    "MEAN": {
        "technologies": ("MongoDB", "Express.js", "Angular", "Node.js"),
        "strengths": ("javascript_everywhere", "rapid_development", "json_native"),
        "weaknesses": ("callback_complexity", "single_threaded"),
        "learning_curve": "medium",
        "community_size": "large",
        "job_market": "excellent",
    },
    "MERN": {
        "technologies": ("MongoDB", "Express.js", "React", "Node.js"),
        "strengths": ("component_based", "virtual_dom", "flexible"),
        "weaknesses": ("jsx_learning", "rapid_changes"),
        "learning_curve": "medium",
        "community_size": "very_large",
        "job_market": "excellent",
    },
    "LAMP": {
        "technologies": ("Linux", "Apache", "MySQL", "PHP"),
        "strengths": ("mature", "cost_effective", "widely_supported"),
        "weaknesses": ("performance_limitations", "security_concerns"),
        "learning_curve": "low",
        "community_size": "large",
        "job_market": "good",
    },
    "Django_Stack": {
        "technologies": ("Python", "Django", "PostgreSQL", "Redis"),
        "strengths": ("rapid_development", "batteries_included", "secure"),
        "weaknesses": ("monolithic", "python_gil"),
        "learning_curve": "low",
        "community_size": "large",
        "job_market": "excellent",
    },
    "Spring_Boot": {
        "technologies": ("Java", "Spring Boot", "PostgreSQL", "Maven"),
        "strengths": ("enterprise_ready", "scalable", "robust"),
        "weaknesses": ("verbose", "memory_intensive"),
        "learning_curve": "high",
        "community_size": "very_large",
        "job_market": "excellent",
    },
    "Rails_Stack": {
        "technologies": ("Ruby", "Rails", "PostgreSQL", "Redis"),
        "strengths": ("convention_over_config", "rapid_prototyping", "elegant"),
        "weaknesses": ("performance", "declining_popularity"),
        "learning_curve": "medium",
        "community_size": "medium",
        "job_market": "good",
    },
})

ENTERPRISE_STACKS = ("Spring_Boot", "Django_Stack")
FRONTEND_TECHNOLOGIES = ("Angular", "React")

LEARNING_CURVE_SCORES = MappingProxyType({"low": 8, "medium": 6, "high": 3})
COMMUNITY_SCORES = MappingProxyType({"very_large": 9, "large": 7, "medium": 5, "small": 3})
JOB_MARKET_SCORES = MappingProxyType({"excellent": 9, "good": 7, "fair": 5, "poor": 3})

# Catalog weakness keys -> the drawback shown to users
WEAKNESS_DESCRIPTIONS = MappingProxyType({
    "callback_complexity": "Complex callback handling and potential callback hell",
    "single_threaded": "Single-threaded nature may limit CPU-intensive tasks",
    "jsx_learning": "JSX syntax requires additional learning curve",
    "rapid_changes": "Fast-moving ecosystem with frequent updates",
    "performance_limitations": "May not be suitable for high-performance applications",
    "security_concerns": "Requires careful security implementation",
    "monolithic": "Monolithic architecture can limit scalability",
    "python_gil": "Global Interpreter Lock limits true multithreading",
    "verbose": "Verbose syntax requires more code to write",
    "memory_intensive": "Higher memory usage and resource requirements",
    "performance": "Performance may be slower than compiled languages",
    "declining_popularity": "Decreasing community adoption and job market",
})

STACK_CAVEATS = MappingProxyType({
    "MEAN": (
        "Angular has a steep learning curve",
        "MongoDB may not be suitable for complex relationships",
    ),
    "MERN": (
        "React ecosystem changes frequently",
        "State management can become complex",
    ),
    "LAMP": (
        "PHP has mixed reputation in developer community",
        "Apache configuration can be complex",
    ),
    "Django_Stack": (
        "Django can be overkill for simple applications",
        "Python performance limitations for CPU-intensive tasks",
    ),
    "Spring_Boot": (
        "Java verbosity requires more code",
        "Higher memory footprint and startup time",
    ),
    "Rails_Stack": (
        "Ruby performance is slower than other options",
        "Declining popularity in recent years",
    ),
})

# Listed as a con when the criterion scores weak
CRITERION_CONS = MappingProxyType({
    "development_speed": "Slower development velocity",
    "performance": "Performance limitations for high-load applications",
    "scalability": "Scaling challenges with increased load",
    "learning_curve": "Steep learning curve for team members",
    "community_support": "Limited community resources and support",
    "job_market": "Fewer job opportunities available",
    "maintenance_cost": "Higher ongoing maintenance costs",
    "security": "Requires additional security considerations",
})
FALLBACK_CONS = (
    "Requires team training and onboarding time",
    "Technology stack lock-in considerations",
)

# Catalog strength -> scenario the stack is best for
STRENGTH_SCENARIOS = MappingProxyType({
    "rapid_development": "Startups and MVPs",
    "enterprise_ready": "Large enterprise applications",
    "cost_effective": "Budget-conscious projects",
})

DEFAULT_TEAM_SIZE = "3-5 developers"
KEY_MILESTONES = ("MVP completion", "Beta release", "Production launch")
