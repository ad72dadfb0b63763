"""
Decision policies for automated seats.

This package provides the policy protocol and the default threshold bot.
"""

from .base import DecisionPolicy
from .simple_ai import DEFAULT_STRENGTHS, ThresholdPolicy, ThresholdPolicyConfig

__all__ = ['DecisionPolicy', 'ThresholdPolicy', 'ThresholdPolicyConfig', 'DEFAULT_STRENGTHS']
