"""Domain entity — counters shown on the admin dashboard."""

from dataclasses import dataclass


@dataclass
class DashboardStats:
    """Row counts per managed table plus unread contact messages."""

    blogs: int = 0
    works: int = 0
    skills: int = 0
    brands: int = 0
    messages: int = 0
    unread: int = 0
