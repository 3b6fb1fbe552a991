"""
Line item builders.

Pure Python math. Given an EstimateInput and a RateTable, produce the
priced line items for each group (interior, exterior, cabinetry).
"""
