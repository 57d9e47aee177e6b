# pump_launch/core/instruction_builder.py
from construct import Int32ul, Int64ul, PascalString, Struct
from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from .addresses import TokenAddresses, get_associated_token_address
from .constants import BUY_DISCRIMINATOR, CREATE_DISCRIMINATOR
from .pubkeys import PumpAddresses, SolanaProgramAddresses

# Borsh strings: u32 little-endian byte length, then UTF-8 bytes
BorshString = PascalString(Int32ul, "utf8")

CREATE_ARGS_LAYOUT = Struct(
    "name" / BorshString,
    "symbol" / BorshString,
    "uri" / BorshString,
)

BUY_ARGS_LAYOUT = Struct(
    "amount" / Int64ul,
    "max_sol_cost" / Int64ul,
)

# Associated Token Account program instruction index for CreateIdempotent
CREATE_ATA_IDEMPOTENT = b'\x01'


class InstructionBuilder:
    @staticmethod
    def set_compute_unit_limit(units: int) -> Instruction:
        """Creates an instruction to set the compute unit limit for the transaction."""
        return set_compute_unit_limit(units)

    @staticmethod
    def set_compute_unit_price(micro_lamports: int) -> Instruction:
        """Creates an instruction to set the compute unit price (priority fee) for the transaction."""
        return set_compute_unit_price(micro_lamports)

    @staticmethod
    def get_create_ata_idempotent_instruction(payer: Pubkey, owner: Pubkey, mint: Pubkey) -> Instruction:
        """
        Generates the instruction to create an Associated Token Account, succeeding
        without changes if it already exists.
        """
        associated_token_address = get_associated_token_address(owner, mint)
        return Instruction(
            program_id=SolanaProgramAddresses.ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID,
            accounts=[
                AccountMeta(pubkey=payer, is_signer=True, is_writable=True),
                AccountMeta(pubkey=associated_token_address, is_signer=False, is_writable=True),
                AccountMeta(pubkey=owner, is_signer=False, is_writable=False),
                AccountMeta(pubkey=mint, is_signer=False, is_writable=False),
                AccountMeta(pubkey=SolanaProgramAddresses.SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
                AccountMeta(pubkey=SolanaProgramAddresses.TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
            ],
            data=CREATE_ATA_IDEMPOTENT,
        )

    @staticmethod
    def build_pump_fun_create_instruction(
            name: str,
            symbol: str,
            uri: str,
            mint_pubkey: Pubkey,
            user_wallet_pubkey: Pubkey,
            token_addresses: TokenAddresses,
            addresses: PumpAddresses,
    ) -> Instruction:
        """Builds the pump.fun 'create' instruction (mint + bonding curve + metadata)."""
        instruction_data = CREATE_DISCRIMINATOR + CREATE_ARGS_LAYOUT.build(
            {"name": name, "symbol": symbol, "uri": uri}
        )

        accounts = [
            AccountMeta(pubkey=mint_pubkey, is_signer=True, is_writable=True),  # 0. mint
            AccountMeta(pubkey=addresses.mint_authority, is_signer=False, is_writable=False),  # 1. mintAuthority
            AccountMeta(pubkey=token_addresses.bonding_curve, is_signer=False, is_writable=True),  # 2. bondingCurve
            AccountMeta(pubkey=token_addresses.associated_bonding_curve, is_signer=False, is_writable=True),
            # 3. associatedBondingCurve
            AccountMeta(pubkey=addresses.global_account, is_signer=False, is_writable=False),  # 4. global
            AccountMeta(pubkey=SolanaProgramAddresses.TOKEN_METADATA_PROGRAM_ID, is_signer=False,
                        is_writable=False),  # 5. mplTokenMetadata
            AccountMeta(pubkey=token_addresses.metadata, is_signer=False, is_writable=True),  # 6. metadata
            AccountMeta(pubkey=user_wallet_pubkey, is_signer=True, is_writable=True),  # 7. user
            AccountMeta(pubkey=SolanaProgramAddresses.SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            # 8. systemProgram
            AccountMeta(pubkey=SolanaProgramAddresses.TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
            # 9. tokenProgram
            AccountMeta(pubkey=SolanaProgramAddresses.ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID, is_signer=False,
                        is_writable=False),  # 10. associatedTokenProgram
            AccountMeta(pubkey=SolanaProgramAddresses.RENT_SYSVAR_PUBKEY, is_signer=False, is_writable=False),
            # 11. rent
            AccountMeta(pubkey=addresses.event_authority, is_signer=False, is_writable=False),  # 12. eventAuthority
            AccountMeta(pubkey=addresses.program_id, is_signer=False, is_writable=False),  # 13. program
        ]

        return Instruction(
            program_id=addresses.program_id,
            accounts=accounts,
            data=instruction_data
        )

    @staticmethod
    def build_pump_fun_buy_instruction(
            user_wallet_pubkey: Pubkey,
            mint_pubkey: Pubkey,
            bonding_curve_pubkey: Pubkey,
            assoc_bonding_curve_token_account_pubkey: Pubkey,
            token_amount: int,
            max_sol_cost_lamports: int,
            addresses: PumpAddresses,
    ) -> Instruction:
        """Builds the pump.fun 'buy' instruction: receive ``token_amount``, pay at most ``max_sol_cost_lamports``."""
        user_ata_pubkey = get_associated_token_address(user_wallet_pubkey, mint_pubkey)

        instruction_data = BUY_DISCRIMINATOR + BUY_ARGS_LAYOUT.build(
            {"amount": token_amount, "max_sol_cost": max_sol_cost_lamports}
        )

        accounts = [
            AccountMeta(pubkey=addresses.global_account, is_signer=False, is_writable=False),  # 0. global
            AccountMeta(pubkey=addresses.fee_recipient, is_signer=False, is_writable=True),  # 1. feeRecipient
            AccountMeta(pubkey=mint_pubkey, is_signer=False, is_writable=False),  # 2. mint
            AccountMeta(pubkey=bonding_curve_pubkey, is_signer=False, is_writable=True),  # 3. bondingCurve
            AccountMeta(pubkey=assoc_bonding_curve_token_account_pubkey, is_signer=False, is_writable=True),
            # 4. associatedBondingCurve
            AccountMeta(pubkey=user_ata_pubkey, is_signer=False, is_writable=True),  # 5. associatedUser
            AccountMeta(pubkey=user_wallet_pubkey, is_signer=True, is_writable=True),  # 6. user
            AccountMeta(pubkey=SolanaProgramAddresses.SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            # 7. systemProgram
            AccountMeta(pubkey=SolanaProgramAddresses.TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
            # 8. tokenProgram
            AccountMeta(pubkey=SolanaProgramAddresses.RENT_SYSVAR_PUBKEY, is_signer=False, is_writable=False),
            # 9. rent
            AccountMeta(pubkey=addresses.event_authority, is_signer=False, is_writable=False),  # 10. eventAuthority
            AccountMeta(pubkey=addresses.program_id, is_signer=False, is_writable=False),
            # 11. program (pump.fun program itself)
        ]

        return Instruction(
            program_id=addresses.program_id,
            accounts=accounts,
            data=instruction_data
        )
