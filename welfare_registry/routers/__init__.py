from welfare_registry.routers import families, family_members, health, health_history, member_needs

__all__ = [
    "health",
    "families",
    "family_members",
    "member_needs",
    "health_history",
]
