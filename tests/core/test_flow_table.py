"""
Properties of the flow table as a whole.

Every flow must terminate, and the fields a flow collects must cover what
its generator needs.
"""

from nutriplanner.flows import FLOW_COMPLETE, FLOW_STEPS, FlowIdentifier, resolve, steps_for
from nutriplanner.generators import GENERATORS, OPTIONAL_FIELDS, build_dispatch_table

# A non-empty value per field name, enough to satisfy any predicate
SAMPLE_VALUES = {
    "members": [{"first_name": "Awa"}],
    "ingredients": [{"name": "rice"}],
    "current_ingredients": [],
}


def _value_for(field):
    return SAMPLE_VALUES.get(field, f"{field}-value")


def _walk(flow):
    """Answer steps in order until the resolver reports completion or a terminal step is answered."""
    context = {}
    fields = []
    for _ in range(len(FLOW_STEPS[flow]) + 1):
        step = resolve(flow, context)
        if step.completes_flow:
            return context, fields, step
        context[step.field] = _value_for(step.field)
        fields.append(step.field)
        if step.is_terminal:
            return context, fields, step
    raise AssertionError(f"{flow.value} did not terminate")


class TestTermination:
    """Each flow reaches a terminal step within its declared number of steps."""

    def test_every_flow_has_steps(self):
        assert set(FLOW_STEPS) == set(FlowIdentifier)

    def test_every_flow_terminates(self):
        for flow in FlowIdentifier:
            steps_for(flow)
            _, fields, last = _walk(flow)
            assert last.is_terminal, flow
            assert len(fields) <= len(FLOW_STEPS[flow])

    def test_complete_after_terminal(self):
        for flow in FlowIdentifier:
            context, _, _ = _walk(flow)
            assert resolve(flow, context) is FLOW_COMPLETE, flow


class TestFieldCompleteness:
    """What a flow collects is what its generator receives."""

    def test_every_flow_has_a_generator(self):
        table = build_dispatch_table()
        assert len(table) == len(FlowIdentifier)
        for flow in FlowIdentifier:
            assert flow in table

    def test_collected_fields_cover_required(self):
        for flow in FlowIdentifier:
            context, _, _ = _walk(flow)
            required, _, _ = GENERATORS[flow]
            assert set(required) <= set(context), flow

    def test_required_fields_are_declared_steps(self):
        for flow, (required, _, _) in GENERATORS.items():
            declared = {step.field for step in FLOW_STEPS[flow]}
            assert set(required) == declared, flow

    def test_optional_fields_are_never_asked(self):
        table = build_dispatch_table()
        for flow, optional in OPTIONAL_FIELDS.items():
            declared = {step.field for step in FLOW_STEPS[flow]}
            assert not set(optional) & declared, flow
            assert table.entry(flow).optional_fields == optional


class TestDeterminism:
    def test_resolution_is_repeatable(self):
        for flow in FlowIdentifier:
            assert _walk(flow)[1] == _walk(flow)[1]
