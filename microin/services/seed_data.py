# microin/services/seed_data.py
from datetime import date

from ..models.task import Task, TaskStatus
from ..models.user import SkillNFT, User

DEMO_STUDENT_WALLET = "0x1234...AbCd"
DEMO_COMPANY_WALLET = "0x5678...EfGh"


def demo_users() -> list[User]:
    return [
        User(
            wallet_address=DEMO_STUDENT_WALLET,
            name="Alex Johnson",
            is_company=False,
            skills=["React", "TypeScript", "Node.js", "Solidity"],
            portfolio=[
                SkillNFT("nft1", "t1", "Build a DApp Landing Page",
                         "https://picsum.photos/seed/nft1/500/500", date(2023, 10, 26)),
                SkillNFT("nft2", "t2", "Create a Smart Contract",
                         "https://picsum.photos/seed/nft2/500/500", date(2023, 9, 15)),
                SkillNFT("nft3", "t3", "API Integration for Price Feeds",
                         "https://picsum.photos/seed/nft3/500/500", date(2023, 8, 1)),
            ],
        ),
        User(wallet_address=DEMO_COMPANY_WALLET, name="Innovate Inc.", is_company=True),
    ]


def demo_tasks() -> list[Task]:
    return [
        Task(
            id="t1", title="Build a DApp Landing Page", company="ChainInnovate",
            description="Design and build a responsive landing page for our new decentralized "
                        "application using React and Tailwind CSS.",
            skills=["React", "TailwindCSS", "Web3"], reward=150, reward_token="USDC",
            status=TaskStatus.COMPLETED, assignee=DEMO_STUDENT_WALLET,
        ),
        Task(
            id="t2", title="Create a Smart Contract", company="DeFi Solutions",
            description="Develop an ERC-20 token smart contract with basic functionalities "
                        "like minting and transferring.",
            skills=["Solidity", "Hardhat", "Ethers.js"], reward=200, reward_token="USDC",
            status=TaskStatus.COMPLETED, assignee=DEMO_STUDENT_WALLET,
        ),
        Task(
            id="t4", title="Backend API for Task Board", company="DevTools Co.",
            description="Create a simple Node.js/Express backend API for managing tasks "
                        "with CRUD operations.",
            skills=["Node.js", "Express", "MongoDB"], reward=180, reward_token="USDC",
        ),
        Task(
            id="t5", title="UI Mockups for NFT Marketplace", company="PixelPerfect",
            description="Design high-fidelity UI mockups in Figma for a new NFT marketplace, "
                        "focusing on user experience.",
            skills=["Figma", "UI/UX Design"], reward=120, reward_token="USDC",
        ),
    ]


def seed_demo_data(store) -> None:
    store.load(tasks=demo_tasks(), users=demo_users())
