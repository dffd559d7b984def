"""CHIP-8 return stack operations."""

import jax.numpy as jnp
from quirk8.constants import ADDRESS_MASK, PROGRAM_START, STACK_SIZE
from quirk8.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack, discarding the oldest entry when full."""
    masked_address = jnp.astype(address & ADDRESS_MASK, jnp.uint16)
    full = stack.pointer >= STACK_SIZE
    data = jnp.where(full, jnp.roll(stack.data, -1), stack.data)
    slot = jnp.minimum(stack.pointer, STACK_SIZE - 1)
    return stack.replace(data=data.at[slot].set(masked_address), pointer=slot + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack; an empty stack yields the program start."""
    empty = stack.pointer <= 0
    new_pointer = jnp.maximum(stack.pointer - 1, 0)
    popped_address = jnp.where(empty, jnp.uint16(PROGRAM_START), stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(jnp.where(empty, stack.data[new_pointer], 0))
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
