"""Domain packages - one per entity collection"""
