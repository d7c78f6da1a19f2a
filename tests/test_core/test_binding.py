"""Tests for bind, unbind and alpha-equivalence."""

from stlc.core.ast import (
    Ann,
    App,
    Case,
    IntLit,
    Lam,
    Lit,
    PAnn,
    PBinder,
    PLit,
    PRecord,
    PTag,
    Proj,
    Record,
    Scope,
    StringLit,
    Tag,
    Var,
)
from stlc.core.binding import alpha_eq, bind, binders, unbind
from stlc.core.names import Binder, BoundVar, FreeVar
from stlc.core.types import INT, STRING, TypeArrow


def identity(label: str = "x") -> Lam:
    """λx.x with a fresh binder."""
    x = FreeVar.fresh(label)
    return Lam(bind(PBinder(Binder(x)), Var(x)))


def const() -> Lam:
    """λx.λy.x"""
    x = FreeVar.fresh("x")
    y = FreeVar.fresh("y")
    return Lam(bind(PBinder(Binder(x)), Lam(bind(PBinder(Binder(y)), Var(x)))))


# =============================================================================
# Binders
# =============================================================================


class TestBinders:
    """Tests for collecting binder variables."""

    def test_single_binder(self):
        x = FreeVar.fresh("x")
        assert binders(PBinder(Binder(x))) == [x]

    def test_literal_has_none(self):
        assert binders(PLit(IntLit(1))) == []

    def test_left_to_right_order(self):
        a, b, c = FreeVar.fresh("a"), FreeVar.fresh("b"), FreeVar.fresh("c")
        pattern = PRecord(
            [
                ("x", PAnn(PBinder(Binder(a)), INT)),
                ("y", PTag("t", PBinder(Binder(b)))),
                ("z", PRecord([("w", PBinder(Binder(c)))])),
            ]
        )
        assert binders(pattern) == [a, b, c]


# =============================================================================
# Bind
# =============================================================================


class TestBind:
    """Tests for closing a body over a pattern."""

    def test_bind_identity(self):
        x = FreeVar.fresh("x")
        scope = bind(PBinder(Binder(x)), Var(x))
        assert scope.body == Var(BoundVar(0, 0))

    def test_bind_keeps_label_as_hint(self):
        x = FreeVar.fresh("x")
        scope = bind(PBinder(Binder(x)), Var(x))
        assert scope.body.name.label == "x"

    def test_unrelated_free_var_stays_free(self):
        x = FreeVar.fresh("x")
        y = FreeVar.fresh("y")
        scope = bind(PBinder(Binder(x)), App(Var(x), Var(y)))
        assert scope.body == App(Var(BoundVar(0, 0)), Var(y))

    def test_binder_index_follows_pattern_order(self):
        a = FreeVar.fresh("a")
        b = FreeVar.fresh("b")
        pattern = PRecord([("x", PBinder(Binder(a))), ("y", PBinder(Binder(b)))])
        scope = bind(pattern, Record([("first", Var(b)), ("second", Var(a))]))
        assert scope.body == Record(
            [("first", Var(BoundVar(0, 1))), ("second", Var(BoundVar(0, 0)))]
        )

    def test_nested_lambda_increases_depth(self):
        """λx.λy.x: x is one scope out from its occurrence."""
        x = FreeVar.fresh("x")
        y = FreeVar.fresh("y")
        inner = bind(PBinder(Binder(y)), Var(x))
        outer = bind(PBinder(Binder(x)), Lam(inner))
        assert outer.body == Lam(Scope(PBinder(Binder(y)), Var(BoundVar(1, 0))))

    def test_case_clause_increases_depth(self):
        x = FreeVar.fresh("x")
        n = FreeVar.fresh("n")
        clause = bind(PBinder(Binder(n)), Var(x))
        scope = bind(PBinder(Binder(x)), Case(Var(x), [clause]))
        assert scope.body == Case(
            Var(BoundVar(0, 0)), [Scope(PBinder(Binder(n)), Var(BoundVar(1, 0)))]
        )

    def test_bind_reaches_every_node(self):
        x = FreeVar.fresh("x")
        body = Record(
            [
                ("ann", Ann(Var(x), INT)),
                ("proj", Proj(Var(x), "l")),
                ("tag", Tag("t", Var(x))),
            ]
        )
        scope = bind(PBinder(Binder(x)), body)
        bound = Var(BoundVar(0, 0))
        assert scope.body == Record(
            [("ann", Ann(bound, INT)), ("proj", Proj(bound, "l")), ("tag", Tag("t", bound))]
        )

    def test_pattern_without_binders_shares_body(self):
        body = Lit(IntLit(1))
        scope = bind(PLit(IntLit(1)), body)
        assert scope.body is body


# =============================================================================
# Unbind
# =============================================================================


class TestUnbind:
    """Tests for opening a scope."""

    def test_unbind_gives_fresh_variables(self):
        x = FreeVar.fresh("x")
        scope = bind(PBinder(Binder(x)), Var(x))
        pattern, body = unbind(scope)
        (fresh,) = binders(pattern)
        assert fresh != x
        assert fresh.label == "x"
        assert body == Var(fresh)

    def test_unbind_twice_gives_different_variables(self):
        scope = identity().scope
        p1, _ = unbind(scope)
        p2, _ = unbind(scope)
        assert binders(p1) != binders(p2)

    def test_unbind_nested_opens_outer_only(self):
        lam = const()
        pattern, body = unbind(lam.scope)
        (x,) = binders(pattern)
        match body:
            case Lam(Scope(_, inner_body)):
                assert inner_body == Var(x)
            case _:
                raise AssertionError(f"expected a lambda, got {body!r}")

    def test_unbind_preserves_pattern_shape(self):
        a = FreeVar.fresh("a")
        pattern = PRecord([("x", PAnn(PBinder(Binder(a)), INT)), ("y", PLit(StringLit("s")))])
        opened, _ = unbind(bind(pattern, Var(a)))
        assert alpha_eq(opened, pattern)
        assert binders(opened) != [a]

    def test_bind_unbind_roundtrip_is_alpha_equivalent(self):
        lam = const()
        pattern, body = unbind(lam.scope)
        assert alpha_eq(Lam(bind(pattern, body)), lam)

    def test_unbind_without_binders(self):
        scope = bind(PLit(IntLit(0)), Lit(StringLit("zero")))
        pattern, body = unbind(scope)
        assert pattern is scope.pattern
        assert body is scope.body


# =============================================================================
# Alpha-equivalence
# =============================================================================


class TestAlphaEq:
    """Tests for alpha-equivalence."""

    def test_identity_functions_are_equivalent(self):
        assert alpha_eq(identity("x"), identity("y"))

    def test_reflexive(self):
        for term in [identity(), const(), Lit(IntLit(1)), Var(FreeVar.fresh("z"))]:
            assert alpha_eq(term, term)

    def test_symmetric_and_transitive(self):
        a, b, c = identity("a"), identity("b"), identity("c")
        assert alpha_eq(a, b) and alpha_eq(b, a)
        assert alpha_eq(b, c)
        assert alpha_eq(a, c)

    def test_free_variables_compare_by_token(self):
        x = FreeVar.fresh("x")
        assert alpha_eq(Var(x), Var(FreeVar(x.id, "other")))
        assert not alpha_eq(Var(x), Var(FreeVar.fresh("x")))

    def test_bound_coordinates_must_match(self):
        """λx.λy.x differs from λx.λy.y."""
        x = FreeVar.fresh("x")
        y = FreeVar.fresh("y")
        const_second = Lam(bind(PBinder(Binder(x)), Lam(bind(PBinder(Binder(y)), Var(y)))))
        assert not alpha_eq(const(), const_second)

    def test_free_and_bound_differ(self):
        assert not alpha_eq(Var(BoundVar(0, 0)), Var(FreeVar.fresh()))

    def test_pattern_annotations_matter(self):
        x = FreeVar.fresh("x")
        y = FreeVar.fresh("y")
        int_lam = Lam(bind(PAnn(PBinder(Binder(x)), INT), Var(x)))
        str_lam = Lam(bind(PAnn(PBinder(Binder(y)), STRING), Var(y)))
        assert not alpha_eq(int_lam, str_lam)

    def test_record_field_order_matters(self):
        one, two = Lit(IntLit(1)), Lit(IntLit(2))
        assert alpha_eq(Record([("a", one), ("b", two)]), Record([("a", one), ("b", two)]))
        assert not alpha_eq(Record([("a", one), ("b", two)]), Record([("b", two), ("a", one)]))

    def test_case_clauses(self):
        def case_expr() -> Case:
            n = FreeVar.fresh("n")
            return Case(Tag("ok", Lit(IntLit(1))), [bind(PTag("ok", PBinder(Binder(n))), Var(n))])

        assert alpha_eq(case_expr(), case_expr())
        assert not alpha_eq(case_expr(), Case(Tag("ok", Lit(IntLit(1))), []))

    def test_types(self):
        assert alpha_eq(TypeArrow(INT, STRING), TypeArrow(INT, STRING))
        assert not alpha_eq(TypeArrow(INT, STRING), TypeArrow(STRING, INT))

    def test_different_kinds(self):
        assert not alpha_eq(Lit(IntLit(1)), Tag("a", Lit(IntLit(1))))
        assert not alpha_eq(INT, Lit(IntLit(1)))
