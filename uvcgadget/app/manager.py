# uvcgadget/app/manager.py
from __future__ import annotations

import logging
import time
from typing import Optional, Sequence, Union

from uvcgadget.configfs.base import ConfigTree
from uvcgadget.core.context import Context
from uvcgadget.core.errors import DeviceError, PreconditionError, ResourceError
from uvcgadget.interfaces import ControllerSource, VideoNodeFinder
from uvcgadget.model.formats import VideoFormat
from uvcgadget.model.frame import FrameDescriptor, FrameSpec
from uvcgadget.runtime.builder import DescriptorTreeBuilder
from uvcgadget.runtime.guards import tree_op
from uvcgadget.runtime.state import (
    GadgetState,
    GadgetStatus,
    bound_udc,
    inspect_state,
    read_frames,
)


# an empty write never reaches the UDC store callback
UNBIND_VALUE = "\n"


class GadgetManager:
    """
    Lifecycle of one UVC gadget: Absent -> Configured -> Enabled and back.

    Holds no state of its own: every decision re-reads the tree, since other
    tools (or the kernel dropping a controller) may change it at any time.
    """

    def __init__(
        self,
        context: Context,
        *,
        tree: ConfigTree,
        controllers: ControllerSource,
        video_nodes: Optional[VideoNodeFinder] = None,
        udc: Optional[str] = None,
        settle_delay_s: float = 1.0,
        logger: Optional[logging.Logger] = None,
    ):
        self._context = context
        self._tree = tree
        self._controllers = controllers
        self._video_nodes = video_nodes
        self._udc = udc
        self._settle_delay_s = max(0.0, float(settle_delay_s))
        self._log = logger or logging.getLogger(__name__)

        self._layout = context.layout
        self._builder = DescriptorTreeBuilder(tree, self._layout, logger=self._log)

    @property
    def context(self) -> Context:
        return self._context

    @property
    def builder(self) -> DescriptorTreeBuilder:
        return self._builder

    # ------------------------------------------------------------------
    # inspection
    # ------------------------------------------------------------------
    def state(self) -> GadgetState:
        return inspect_state(self._tree, self._layout)

    def status(self) -> GadgetStatus:
        """Pure read: state, binding, frames and video node, recomputed now."""
        L = self._layout
        state = self.state()
        if state is GadgetState.ABSENT:
            return GadgetStatus(gadget=L.gadget, state=state)

        udc = bound_udc(self._tree, L)
        udc_present = None
        video_node = None
        if udc:
            udc_present = udc in self._controllers.available()
            if self._video_nodes is not None:
                video_node = self._video_nodes.find([udc, L.function])

        return GadgetStatus(
            gadget=L.gadget,
            state=state,
            function_present=self._builder.function_exists(),
            udc=udc,
            udc_present=udc_present,
            video_node=video_node,
            frames=read_frames(self._tree, L),
        )

    # ------------------------------------------------------------------
    # controller binding
    # ------------------------------------------------------------------
    def _select_udc(self, preferred: Optional[str] = None) -> str:
        udcs = self._controllers.available()
        if not udcs:
            raise DeviceError(
                "No USB Device Controller available.",
                hint="Check /sys/class/udc (e.g. dtoverlay=dwc2 and the dwc2 module on a Raspberry Pi).",
            )

        wanted = preferred or self._udc
        if wanted:
            if wanted not in udcs:
                raise DeviceError(
                    f"USB Device Controller '{wanted}' is not available.",
                    hint=f"Available: {', '.join(udcs)}",
                    details={"udc": wanted, "available": list(udcs)},
                )
            return wanted
        return udcs[0]

    def _bind(self, preferred: Optional[str] = None) -> str:
        udc = self._select_udc(preferred)
        with tree_op("bind controller via", self._layout.udc):
            self._tree.write(self._layout.udc, udc)
        self._log.info("GADGET_BOUND udc=%s", udc)
        return udc

    def _unbind(self) -> Optional[str]:
        """Clear the binding. Returns the controller that was bound, None if it was not."""
        udc = bound_udc(self._tree, self._layout)
        if not udc:
            return None
        with tree_op("unbind controller via", self._layout.udc, missing_ok=True):
            self._tree.write(self._layout.udc, UNBIND_VALUE)
        self._log.info("GADGET_UNBOUND udc=%s", udc)
        return udc

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def _build(self) -> None:
        ctx = self._context
        self._builder.create_gadget(ctx.identity, ctx.config, ctx.os_desc)
        self._builder.create_function(ctx.function)
        for spec in ctx.registry:
            self._builder.add_frame(spec)
        self._builder.link_all()
        self._log.info("GADGET_BUILT frames=%d", len(ctx.registry))

    def start(self) -> GadgetStatus:
        state = self.state()
        self._log.info("GADGET_START name=%s state=%s", self._layout.gadget, state.value)

        if state is GadgetState.ENABLED:
            return self.status()

        # no controller means no build either
        udc = self._select_udc()
        if state is GadgetState.ABSENT:
            self._build()

        self._bind(udc)
        return self.status()

    def stop(self) -> GadgetStatus:
        if self._unbind() is None:
            self._log.info("GADGET_STOP_NOOP name=%s", self._layout.gadget)
        return self.status()

    def remove(self) -> GadgetStatus:
        if self.state() is GadgetState.ABSENT:
            self._log.info("GADGET_REMOVE_NOOP name=%s", self._layout.gadget)
            return self.status()

        try:
            self._unbind()
        except ResourceError as e:
            self._log.warning("GADGET_UNBIND_FAILED path=%s msg=%s", e.path, e.message)

        self._builder.teardown()
        self._log.info("GADGET_REMOVED name=%s", self._layout.gadget)
        return self.status()

    def restart(self) -> GadgetStatus:
        """
        remove() then start(). Frames added with add() are not part of the static
        registry and are therefore gone afterwards.
        """
        self.remove()
        if self._settle_delay_s > 0:
            # let the controller release the port before binding again
            time.sleep(self._settle_delay_s)
        return self.start()

    def add(
        self,
        name: str,
        width: int,
        height: int,
        intervals: Sequence[int],
        fmt: Union[str, VideoFormat],
    ) -> FrameDescriptor:
        """
        Add one frame to an existing function.

        Everything is validated before the first mutation. A live gadget is
        unbound while its descriptors change and bound again afterwards.
        """
        spec = FrameSpec.create(name=name, width=width, height=height, intervals=intervals, fmt=fmt)

        if not self._builder.function_exists():
            raise PreconditionError(
                f"UVC function '{self._layout.function}' does not exist.",
                hint="Run 'uvc-gadget start' first.",
                details={"gadget": self._layout.gadget},
            )
        self._builder.validate_frame(spec)

        previous_udc = self._unbind()
        self._builder.unlink_all()
        desc = self._builder.add_frame(spec)
        self._builder.link_all()

        if previous_udc:
            self._bind(previous_udc)
        return desc
