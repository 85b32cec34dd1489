from .task import Task, TaskStatus
from .user import User, SkillNFT
