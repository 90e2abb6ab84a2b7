"""
BTD Core Math

Детерминированное вычислительное ядро протокола BTD (синтетический доллар,
обеспеченный WBTC): mint/redeem, collateral ratio, динамические ставки,
агрегация оракулов и распределение наград.

Вся арифметика — целочисленная fixed-point (18 знаков), без float.
"""

__version__ = "0.3.0"
