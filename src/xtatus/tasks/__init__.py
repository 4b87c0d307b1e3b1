"""
Task subsystem.

Components:
- task_models.py: data structures (TaskDescriptor, OutputBuffer, RunResult)
- task_config.py: task file loader (`<interval> <path>` per line)
- task_runner.py: subprocess invocation + stdout capture
- task_scheduler.py: one timing loop thread per task
- registry.py: owns buffers + lock, exposes snapshot() to consumers
"""