"""
Core
Contract field reconciliation and draft lifecycle.
"""

from contract_autofill.core.lifecycle import DraftLifecycleManager
from contract_autofill.core.reconciler import reconcile_fields, apply_manual_edit, overall_confidence

__all__ = ['DraftLifecycleManager', 'reconcile_fields', 'apply_manual_edit', 'overall_confidence']
