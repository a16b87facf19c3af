"""Salon Manager - single-tenant salon management backend"""
