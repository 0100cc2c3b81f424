"""
Fitlead - AI fitness coach lead funnel.

Components:
- Intake: Scripted questionnaire that collects a fitness profile
- Orchestration: Store lead → generate diet plan → deliver over WhatsApp
- Dashboard: Lead listing, stats, and CSV export
"""

__version__ = "1.0.0"
