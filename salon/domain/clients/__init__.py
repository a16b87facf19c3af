"""Client domain - client records and contact details"""
