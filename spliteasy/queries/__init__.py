"""Query use cases package."""

from spliteasy.queries.use_cases import BillQueries, GroupQueries, MemberQueries

__all__ = ["BillQueries", "GroupQueries", "MemberQueries"]
