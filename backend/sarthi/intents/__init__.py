from sarthi.intents.cascade import RuleCascade, explain, resolve

__all__ = ["RuleCascade", "explain", "resolve"]
