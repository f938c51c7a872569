import logging
from aiogram import Router
from aiogram.filters import CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from aiogram.utils.markdown import hbold

from ..keyboards.wizard import get_start_keyboard

router = Router()


@router.message(CommandStart())
async def command_start_handler(message: Message, state: FSMContext) -> None:
    """
    This handler receives messages with `/start` command
    and drops any previous wizard session of the chat.
    """
    logging.info(f"command_start_handler: /start from user {message.from_user.id}.")
    await state.clear()

    await message.answer(
        f"Hello, {hbold(message.from_user.full_name)}!\n\n"
        f"{hbold('Data Reuse Navigator')} helps researchers evaluate existing datasets "
        "and take concrete steps to reuse or responsibly archive them.",
        reply_markup=get_start_keyboard()
    )
