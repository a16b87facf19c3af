"""Staff domain - salon staff members"""
