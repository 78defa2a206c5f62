"""Read-only system optimization metrics"""
