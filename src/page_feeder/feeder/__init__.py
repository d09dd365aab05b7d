"""
Feeder subsystem.

Components:
- feeder_task.py: FeederTask (state, transition function, liveness predicate)
- feeder_api.py: create_feeder / scan_to_queue / query_to_queue
- drain.py: polling wait loop around FeederTask.is_running()
"""
