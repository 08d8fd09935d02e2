"""
Planning state for the menu editor UI.

The state is an immutable PlannerState. Every reducer takes a state and
returns a new one; unknown ids return the state unchanged. The UI owns
the state; nothing in the procurement services reads it. Sessions reach
the database through ``MenuSession.to_payload()`` and ``save_menu``.

Usage:
    state = PlannerState()
    state = add_session(state, MenuSession(id="s1", date="2025-01-01",
                                           canteen="canteen-1", meal="lunch"))
    state = add_dish(state, "s1", DraftDish(id="d1", name="红烧肉"))
    kitchen.save_menu(get_session(state, "2025-01-01", "canteen-1", "lunch").to_payload())
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

MODE_PLANNING = "planning"
MODE_PROCUREMENT = "procurement"
MODES = (MODE_PLANNING, MODE_PROCUREMENT)


@dataclass(frozen=True)
class DraftIngredient:
    """Ingredient row as typed in the editor (quantity kept as text)."""

    name: str
    quantity: str = ""
    unit: str = ""
    remark: str = ""


@dataclass(frozen=True)
class DraftDish:
    id: str
    name: str
    planned_servings: str = ""
    chef_name: str = ""
    ingredients: tuple[DraftIngredient, ...] = ()
    remarks: str = ""


@dataclass(frozen=True)
class MenuSession:
    """Editor session for one (date, canteen, meal)."""

    id: str
    date: str
    canteen: str
    meal: str
    status: str = "draft"
    dishes: tuple[DraftDish, ...] = ()

    def to_payload(self) -> dict:
        """Input for services.menus.save_menu. Rows without a name are dropped."""
        return {
            "date": self.date,
            "canteen": self.canteen,
            "meal": self.meal,
            "status": self.status,
            "dishes": [
                {
                    "name": dish.name,
                    "planned_servings": dish.planned_servings or None,
                    "chef_name": dish.chef_name,
                    "remarks": dish.remarks,
                    "ingredients": [
                        {
                            "name": row.name,
                            "quantity": row.quantity,
                            "unit": row.unit,
                            "remark": row.remark,
                        }
                        for row in dish.ingredients
                        if row.name.strip()
                    ],
                }
                for dish in self.dishes
            ],
        }


@dataclass(frozen=True)
class PlannerState:
    mode: str = MODE_PLANNING
    sessions: tuple[MenuSession, ...] = field(default_factory=tuple)


# ── Reducers ──


def set_mode(state: PlannerState, mode: str) -> PlannerState:
    if mode not in MODES:
        raise ValueError(f"Unknown planner mode: {mode!r}")
    return replace(state, mode=mode)


def set_sessions(state: PlannerState, sessions) -> PlannerState:
    return replace(state, sessions=tuple(sessions))


def add_session(state: PlannerState, session: MenuSession) -> PlannerState:
    return replace(state, sessions=state.sessions + (session,))


def update_session(state: PlannerState, session_id: str, **updates) -> PlannerState:
    updates.pop("id", None)
    return replace(
        state,
        sessions=tuple(
            replace(s, **updates) if s.id == session_id else s for s in state.sessions
        ),
    )


def remove_session(state: PlannerState, session_id: str) -> PlannerState:
    return replace(
        state, sessions=tuple(s for s in state.sessions if s.id != session_id)
    )


def _map_dishes(state: PlannerState, session_id: str, func) -> PlannerState:
    return replace(
        state,
        sessions=tuple(
            replace(s, dishes=func(s.dishes)) if s.id == session_id else s
            for s in state.sessions
        ),
    )


def add_dish(state: PlannerState, session_id: str, dish: DraftDish) -> PlannerState:
    return _map_dishes(state, session_id, lambda dishes: dishes + (dish,))


def update_dish(
    state: PlannerState, session_id: str, dish_id: str, **updates
) -> PlannerState:
    updates.pop("id", None)
    if "ingredients" in updates:
        updates["ingredients"] = tuple(updates["ingredients"])
    return _map_dishes(
        state,
        session_id,
        lambda dishes: tuple(
            replace(d, **updates) if d.id == dish_id else d for d in dishes
        ),
    )


def remove_dish(state: PlannerState, session_id: str, dish_id: str) -> PlannerState:
    return _map_dishes(
        state,
        session_id,
        lambda dishes: tuple(d for d in dishes if d.id != dish_id),
    )


# ── Selectors ──


def get_session(
    state: PlannerState, date: str, canteen: str, meal: str
) -> MenuSession | None:
    for session in state.sessions:
        if (session.date, session.canteen, session.meal) == (date, canteen, meal):
            return session
    return None


def sessions_by_date(state: PlannerState, date: str) -> list[MenuSession]:
    return [s for s in state.sessions if s.date == date]
