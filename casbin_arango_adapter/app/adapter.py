"""
casbin adapter backed by the ArangoDB rule store.
"""

from typing import List

from casbin import persist

from casbin_arango_adapter.shared.logging import get_logger
from .persistence.arangodb import ArangoRuleStore
from .rules.models import PolicyRule

# Model sections persisted by save_policy
POLICY_SECTIONS = ("p", "g")


class CasbinArangoAdapter(persist.Adapter):
    """Translates casbin model calls into rule store operations.

    Also provides add_policies/remove_policies, which casbin uses for batch
    updates when the adapter has them.
    """

    def __init__(self, store: ArangoRuleStore):
        self.store = store
        self.logger = get_logger("casbin_arango.adapter")

    def load_policy(self, model):
        """Load all rules into the model.

        Nothing is added to the model unless every document decodes.
        """
        rules = self.store.load()

        for rule in rules:
            sec = rule.section
            if sec not in model.model or rule.ptype not in model.model[sec]:
                self.logger.warning("Skipping rule for undefined policy type", ptype=rule.ptype)
                continue
            model.add_policy(sec, rule.ptype, list(rule.values))

    def save_policy(self, model) -> bool:
        """Replace the stored rules with the model's p and g rules."""
        rules: List[PolicyRule] = []
        for sec in POLICY_SECTIONS:
            if sec not in model.model:
                continue
            for ptype, assertion in model.model[sec].items():
                for rule in assertion.policy:
                    rules.append(PolicyRule(ptype, tuple(rule)))

        self.store.save_all(rules)
        return True

    def add_policy(self, sec, ptype, rule) -> bool:
        self.store.add_one(ptype, rule)
        return True

    def add_policies(self, sec, ptype, rules) -> bool:
        self.store.add_many([PolicyRule(ptype, tuple(rule)) for rule in rules])
        return True

    def remove_policy(self, sec, ptype, rule) -> bool:
        self.store.remove_one(ptype, rule)
        return True

    def remove_policies(self, sec, ptype, rules) -> bool:
        self.store.remove_many([PolicyRule(ptype, tuple(rule)) for rule in rules])
        return True

    def remove_filtered_policy(self, sec, ptype, field_index: int, *field_values: str) -> bool:
        """Remove rules matching the filter.

        casbin counts field_index from the first value (v0), which is mapping
        position 1.
        """
        self.store.remove_filtered(ptype, field_index + 1, list(field_values))
        return True
