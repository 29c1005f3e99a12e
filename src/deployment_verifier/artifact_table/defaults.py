"""
Embedded artifact table for the Base Sepolia challenge deployment.
"""

from .descriptor import ArtifactTable, build_table

DEFAULT_NETWORK = 'base-sepolia'

ADMIN_ADDRESS = '0xb843A2D0D4B9E628500d2E0f6f0382e063C14a95'

DEFAULT_ENTRIES = [
    (
        'ChallengeEscrow',
        '0xC107f8328712998abBB2cCf559f83EACF476AE82',
        ['@ChallengeFactory'],
        'src/ChallengeEscrow.sol:ChallengeEscrow',
    ),
    (
        'ChallengeFactory',
        '0xcE1D04A1830035Aa117A910f285818FF1AFca621',
        [
            '@ChallengeEscrow',  # stake escrow
            ADMIN_ADDRESS,  # admin
            ADMIN_ADDRESS,  # platform fee recipient
        ],
        'src/ChallengeFactory.sol:ChallengeFactory',
    ),
    (
        'PointsEscrow',
        '0xCfAa7FCE305c26F2429251e5c27a743E1a0C3FAf',
        ['@ChallengeFactory'],
        'src/PointsEscrow.sol:PointsEscrow',
    ),
]


def default_table() -> ArtifactTable:
    """Build the embedded deployment table."""
    return build_table(DEFAULT_ENTRIES)
