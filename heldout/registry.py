# heldout/registry.py
from __future__ import annotations

from typing import Any, Callable, Dict, Literal, Mapping

from heldout.core.interfaces import ExampleStream, Learner, PerformanceEvaluator
from heldout.evaluation.evaluator import BasicClassificationPerformanceEvaluator
from heldout.learners.majority import MajorityClassLearner
from heldout.learners.sgd import SGDClassifierLearner
from heldout.streams.frame import FileStream
from heldout.streams.hyperplane import HyperplaneGenerator

ComponentKind = Literal["learner", "stream", "evaluator"]


class ComponentFactory:
    """
    ComponentFactory (FINAL)

    Explicit construction of pluggable components.

    Registration is centralized and static:
    - adding a component requires a deliberate code change here
    - no class lookup by dotted name, no import-time side effects
    """

    _REGISTRY: Dict[str, Dict[str, Callable[..., Any]]] = {
        "learner": {
            "sgd": SGDClassifierLearner,
            "majority_class": MajorityClassLearner,
        },
        "stream": {
            "hyperplane": HyperplaneGenerator,
            "file": FileStream.open,
        },
        "evaluator": {
            "basic_classification": BasicClassificationPerformanceEvaluator,
        },
    }

    # --------------------------------------------------
    @classmethod
    def create(cls, kind: ComponentKind, spec: Mapping[str, Any]) -> Any:
        """
        spec:
          {"type": "<registered name>", "params": {...}}

        Rules:
          - unknown kind / missing type -> KeyError
          - unregistered type -> ValueError
        """
        if kind not in cls._REGISTRY:
            raise KeyError(f"[ComponentFactory] unknown component kind: {kind}")

        if "type" not in spec:
            raise KeyError(f"[ComponentFactory] missing 'type' in {kind} config")

        registry = cls._REGISTRY[kind]
        typ = spec["type"]

        if typ not in registry:
            available = ", ".join(sorted(registry))
            raise ValueError(
                f"[ComponentFactory] unknown {kind} type: {typ}. Available: {available}"
            )

        params = dict(spec.get("params") or {})
        return registry[typ](**params)

    @classmethod
    def learner(cls, spec: Mapping[str, Any]) -> Learner:
        return cls.create("learner", spec)

    @classmethod
    def stream(cls, spec: Mapping[str, Any]) -> ExampleStream:
        return cls.create("stream", spec)

    @classmethod
    def evaluator(cls, spec: Mapping[str, Any]) -> PerformanceEvaluator:
        return cls.create("evaluator", spec)
