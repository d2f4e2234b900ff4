"""
Agent registry for Liar's Dice strategies.
Decorate an agent class with @register_agent("name") to make it available to the match runner and scripts.
Every module in this package is imported below so the decorators run.
"""

AGENT_MAP = {}

def register_agent(name):
	"""
	Decorator to register an agent class under a given name.
	Usage:
		@register_agent("bayes")
		class BayesAgent(Agent): ...
	"""
	def decorator(cls):
		AGENT_MAP[name] = cls
		return cls
	return decorator


def make_agent(name, rng=None):
	"""
	Instantiate a registered agent.
	Raises:
		KeyError: If no agent is registered under `name`.
	"""
	if name not in AGENT_MAP:
		raise KeyError(f"Unknown agent {name!r}. Supported: {sorted(AGENT_MAP)}")
	return AGENT_MAP[name](rng=rng)


import importlib
import os
import pkgutil

_this_dir = os.path.dirname(__file__)
_pkg_name = __name__
for _, modname, ispkg in pkgutil.iter_modules([_this_dir]):
	if not ispkg and modname not in ("__init__", "base"):
		importlib.import_module(f"{_pkg_name}.{modname}")
