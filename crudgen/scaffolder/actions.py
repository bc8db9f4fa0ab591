"""Computes which CRUD actions a run generates."""

from __future__ import annotations

from .models import Action, ActionPlan

READ_ACTIONS: tuple[Action, ...] = (Action.INDEX, Action.SHOW)
WRITE_ACTIONS: tuple[Action, ...] = (Action.NEW, Action.EDIT, Action.DELETE)

# Actions rendered as per-row links in the index view
RECORD_ACTIONS: frozenset[Action] = frozenset({Action.SHOW, Action.EDIT})


def plan_actions(with_write: bool) -> ActionPlan:
    """Return the ordered action set and its record-action subset.

    Example::

        plan_actions(False).actions  -> (index, show)
        plan_actions(True).actions   -> (index, show, new, edit, delete)
    """
    actions = READ_ACTIONS + WRITE_ACTIONS if with_write else READ_ACTIONS
    record_actions = tuple(a for a in actions if a in RECORD_ACTIONS)
    return ActionPlan(actions=actions, record_actions=record_actions)
