"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Core app. Shared layout, in-memory repository, alerts
             and exceptions.
-------------------------------------------------------------------------
"""
