"""德州扑克单手牌命令行界面.

人类座位为0号座位，其余为自动座位；手牌进程通过日志事件输出，
轮到人类座位时读取 c(跟注/过牌)、r(加注)、f(弃牌)。
"""

import logging
from typing import Optional

import click

from .core import ActionType, EventBus, HandConfig, InvalidActionError, LoggingEventSink
from .controller import ActionInput, RoundStateMachine, deal_new_hand

_CHOICES = {"c": ActionType.CALL, "r": ActionType.RAISE, "f": ActionType.FOLD}


def play_human_turn(machine: RoundStateMachine, seat_id: int) -> None:
    """读取人类座位的一次行动并执行，无效行动时提示重新输入."""
    view = machine.view(viewer_seat=seat_id)
    participant = view.get_participant(seat_id)
    to_call = max(0, view.highest_commitment - participant.committed_this_round)
    board = " ".join(view.board) or "-"
    hole = " ".join(participant.hole_cards)

    click.echo(f"\n[{view.round_state.label}] 公共牌: {board}  底池: ${view.pot}")
    click.echo(f"你的底牌: {hole}  筹码: ${participant.stack}  需要跟注: ${to_call}")

    while True:
        choice = click.prompt(
            "行动 c=跟注/过牌 r=加注 f=弃牌",
            type=click.Choice(sorted(_CHOICES)),
            show_choices=False
        )
        action_input = ActionInput(seat_id=seat_id, action_type=_CHOICES[choice])
        try:
            machine.apply_action(action_input.to_action(machine.session.raise_unit))
            return
        except InvalidActionError as e:
            click.echo(f"无效行动: {e}")


def run_hand(config: HandConfig, machine: Optional[RoundStateMachine] = None) -> RoundStateMachine:
    """运行一手牌直到摊牌."""
    if machine is None:
        event_bus = EventBus()
        event_bus.subscribe_all(LoggingEventSink())
        machine = deal_new_hand(config, event_bus=event_bus)

    human = config.get_human_seat()
    while not machine.is_hand_over:
        if human is None or machine.current_seat != human.seat:
            raise RuntimeError(f"行动位 {machine.current_seat} 不是人类座位")
        play_human_turn(machine, human.seat)

    outcome = machine.outcome()
    click.echo("\n=== 结算 ===")
    click.echo(f"公共牌: {' '.join(outcome.board) or '-'}")
    for participant in machine.session.participants:
        won = outcome.payouts.get(participant.seat_id, 0)
        description = outcome.hand_descriptions.get(participant.seat_id)
        suffix = f"  {description}" if description else ""
        click.echo(f"{participant.name}: ${outcome.final_stacks[participant.seat_id]} (+{won}){suffix}")
    if outcome.unallocated:
        click.echo(f"未分配筹码: ${outcome.unallocated}")
    return machine


@click.command()
@click.option("--players", "num_players", default=3, show_default=True, type=click.IntRange(2, 9),
              help="座位数量（含人类座位）")
@click.option("--stack", "starting_stack", default=100, show_default=True, type=click.IntRange(1),
              help="每个座位的初始筹码")
@click.option("--raise-unit", default=10, show_default=True, type=click.IntRange(1),
              help="固定加注单位")
@click.option("--seed", default=None, type=int, help="洗牌随机种子")
@click.option("--log-level", default="INFO", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING"], case_sensitive=False))
def main(num_players: int, starting_stack: int, raise_unit: int, seed: Optional[int], log_level: str) -> None:
    """与自动座位对战一手德州扑克."""
    logging.basicConfig(level=getattr(logging, log_level.upper()), format='%(message)s')
    config = HandConfig.default(
        num_players=num_players,
        starting_stack=starting_stack,
        raise_unit=raise_unit,
        random_seed=seed
    )
    run_hand(config)


if __name__ == "__main__":
    main()
