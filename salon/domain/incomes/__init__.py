"""Income domain - income records derived from completed appointments"""
