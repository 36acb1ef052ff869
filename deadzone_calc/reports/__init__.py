from .damage_report import DamageReport, DamageRow, build_damage_report

__all__ = ["DamageReport", "DamageRow", "build_damage_report"]
