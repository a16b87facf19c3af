"""Service domain - the salon service catalog (name, duration, price)"""
