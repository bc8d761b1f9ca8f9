"""Mutation use cases package."""

from spliteasy.mutations.use_cases import BillMutations, GroupMutations, MemberMutations

__all__ = ["BillMutations", "GroupMutations", "MemberMutations"]
