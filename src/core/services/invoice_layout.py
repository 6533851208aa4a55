"""
Invoice layout engine.

Turns an InvoiceRecord into absolute draw commands on a single A4 page
and drives an injected page-writer to produce the PDF bytes. Layout is a
pure function of the record and its resolved assets; the only awaited
step is asset resolution.
"""

import asyncio

from src.config import PdfSettings, get_logger, get_settings
from src.core.entities.drawing import (
    DrawCommand,
    FilledRectCommand,
    FontStyle,
    ImageCommand,
    LineCommand,
    ResolvedImage,
    TextAlign,
    TextCommand,
)
from src.core.entities.invoice import AssetReference, DerivedTotals, InvoiceRecord
from src.core.exceptions import ConfigurationError, RenderError
from src.core.formatting import format_currency, format_quantity, format_rate
from src.core.interfaces.asset_resolver import IAssetResolver
from src.core.interfaces.page_writer import IPageWriter, PageWriterFactory

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Layout grid (mm). Horizontal positions hang off the page margins.
# ---------------------------------------------------------------------------

TITLE_SIZE = 20
BODY_SIZE = 10
TOTAL_SIZE = 12

TITLE_Y = 15
META_LABEL_OFFSET = 60  # label column sits this far left of the right margin
INVOICE_NO_Y = 23
DATE_Y = 28

PARTY_Y = 42
RECIPIENT_X = 110
PARTY_FIRST_LINE_GAP = 6
PARTY_LINE_HEIGHT = 5

TABLE_Y = 80
ROW_HEIGHT = 10
TEXT_BASELINE = 7  # baseline offset inside a table row
CELL_PADDING = 2
COLUMN_WIDTHS = (90, 30, 35, 35)  # description, quantity, unit price, total

SUMMARY_GAP = 10
SUMMARY_ROW_HEIGHT = 8
SUMMARY_ROW_STEP = 10
SUMMARY_BASELINE = 6
TOTAL_BASELINE = 30

HEADER_FILL = (230, 230, 230)
SUMMARY_FILL = (240, 245, 240)
SEPARATOR_COLOR = (200, 200, 200)


class InvoiceLayoutEngine:
    """
    Lays out and renders single-item invoices.

    Holds only configuration and collaborators; each render creates its
    own page-writer, so concurrent renders never share state.
    """

    def __init__(
        self,
        writer_factory: PageWriterFactory,
        asset_resolver: IAssetResolver,
        pdf_settings: PdfSettings | None = None,
    ):
        self._writer_factory = writer_factory
        self._asset_resolver = asset_resolver
        self._settings = pdf_settings or get_settings().pdf

        table_right = self._settings.left_margin + sum(COLUMN_WIDTHS)
        if table_right > self._settings.page_width:
            raise ConfigurationError(
                "pdf.page_width",
                f"line-item table ends at {table_right}mm, "
                f"past the {self._settings.page_width}mm page",
            )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def render(self, record: InvoiceRecord) -> bytes:
        """
        Render the record into document bytes.

        Args:
            record: Invoice to render.

        Returns:
            Complete single-page document.

        Raises:
            RenderError: If the page cannot be laid out (e.g. totals overflow)
                or the page-writer fails to assemble the document.
        """
        logger.info("invoice_render_started", invoice_no=record.invoice_no)

        logo, signature = await asyncio.gather(
            self._resolve_asset(record.logo, "logo"),
            self._resolve_asset(record.signature, "signature"),
        )
        try:
            # Totals can overflow to inf for huge inputs; formatting then fails
            commands = self.layout(record, logo=logo, signature=signature)
            writer = self._writer_factory()
            for command in commands:
                self._apply(writer, command)
            pdf_bytes = writer.output()
        except RenderError:
            raise
        except Exception as exc:
            logger.error(
                "invoice_render_failed",
                invoice_no=record.invoice_no,
                error=str(exc),
            )
            raise RenderError(record.invoice_no, str(exc)) from exc

        logger.info(
            "invoice_rendered",
            invoice_no=record.invoice_no,
            commands=len(commands),
            has_logo=logo is not None,
            has_signature=signature is not None,
            size_bytes=len(pdf_bytes),
        )
        return pdf_bytes

    def layout(
        self,
        record: InvoiceRecord,
        logo: ResolvedImage | None = None,
        signature: ResolvedImage | None = None,
    ) -> list[DrawCommand]:
        """Compute every draw command for the page, in drawing order."""
        totals = DerivedTotals.from_record(record)

        commands: list[DrawCommand] = []
        if logo is not None:
            commands.append(self._logo_command(logo))
        commands.extend(self._title_block(record))
        commands.extend(self._party_columns(record))
        commands.extend(self._line_item_table(record, totals))
        commands.extend(self._summary_block(record, totals))
        if signature is not None:
            commands.append(self._signature_command(signature))
        return commands

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    async def _resolve_asset(
        self, reference: AssetReference | None, kind: str
    ) -> ResolvedImage | None:
        if reference is None:
            return None
        try:
            return await self._asset_resolver.resolve(reference)
        except Exception as exc:
            # Resolvers should return None themselves; this only guards bad ones
            logger.warning("asset_resolution_failed", asset=kind, error=str(exc))
            return None

    def _apply(self, writer: IPageWriter, command: DrawCommand) -> None:
        if not isinstance(command, ImageCommand):
            writer.draw(command)
            return
        try:
            writer.draw(command)
        except Exception as exc:
            logger.warning("asset_embed_failed", asset=command.name, error=str(exc))

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _logo_command(self, logo: ResolvedImage) -> ImageCommand:
        s = self._settings
        return ImageCommand(
            x=s.logo_x,
            y=s.logo_y,
            width=s.logo_width,
            height=logo.height_for_width(s.logo_width),
            image=logo,
            name="logo",
        )

    def _signature_command(self, signature: ResolvedImage) -> ImageCommand:
        s = self._settings
        return ImageCommand(
            x=s.signature_x,
            y=s.signature_y,
            width=s.signature_width,
            height=signature.height_for_width(s.signature_width),
            image=signature,
            name="signature",
        )

    def _title_block(self, record: InvoiceRecord) -> list[DrawCommand]:
        """Heading plus invoice number and date, right-aligned."""
        right = self._settings.content_right
        label_x = right - META_LABEL_OFFSET
        return [
            TextCommand(
                right,
                TITLE_Y,
                self._settings.title_text,
                size=TITLE_SIZE,
                style=FontStyle.BOLD,
                align=TextAlign.RIGHT,
            ),
            TextCommand(label_x, INVOICE_NO_Y, "Invoice No.", size=BODY_SIZE),
            TextCommand(
                right, INVOICE_NO_Y, record.invoice_no, size=BODY_SIZE, align=TextAlign.RIGHT
            ),
            TextCommand(label_x, DATE_Y, "Date", size=BODY_SIZE),
            TextCommand(right, DATE_Y, record.date, size=BODY_SIZE, align=TextAlign.RIGHT),
        ]

    def _party_columns(self, record: InvoiceRecord) -> list[DrawCommand]:
        commands: list[DrawCommand] = []
        columns = (
            (self._settings.left_margin, "ISSUER", record.issuer_lines),
            (RECIPIENT_X, "RECIPIENT", record.recipient_lines),
        )
        for x, header, lines in columns:
            commands.append(
                TextCommand(x, PARTY_Y, header, size=BODY_SIZE, style=FontStyle.BOLD)
            )
            # Absent fields were filtered out, so remaining lines close up
            for i, line in enumerate(lines):
                y = PARTY_Y + PARTY_FIRST_LINE_GAP + i * PARTY_LINE_HEIGHT
                commands.append(TextCommand(x, y, line, size=BODY_SIZE))
        return commands

    def _column_edges(self) -> list[tuple[float, float]]:
        """(left, right) x of each table column."""
        edges = []
        x = self._settings.left_margin
        for width in COLUMN_WIDTHS:
            edges.append((x, x + width))
            x += width
        return edges

    def _table_row(self, y: float, cells: tuple[str, str, str, str]) -> list[DrawCommand]:
        """Description and quantity hug the left, money columns the right."""
        baseline = y + TEXT_BASELINE
        commands: list[DrawCommand] = []
        for i, ((left, right), text) in enumerate(zip(self._column_edges(), cells)):
            if i < 2:
                commands.append(TextCommand(left + CELL_PADDING, baseline, text, size=BODY_SIZE))
            else:
                commands.append(
                    TextCommand(
                        right - CELL_PADDING,
                        baseline,
                        text,
                        size=BODY_SIZE,
                        align=TextAlign.RIGHT,
                    )
                )
        return commands

    def _line_item_table(
        self, record: InvoiceRecord, totals: DerivedTotals
    ) -> list[DrawCommand]:
        left = self._settings.left_margin
        table_width = sum(COLUMN_WIDTHS)
        symbol = self._settings.currency_symbol
        data_y = TABLE_Y + ROW_HEIGHT

        commands: list[DrawCommand] = [
            # Fill first so the header labels stay on top
            FilledRectCommand(left, TABLE_Y, table_width, ROW_HEIGHT, HEADER_FILL),
        ]
        commands.extend(
            self._table_row(TABLE_Y, ("Description", "Quantity", "Unit Price", "Total"))
        )
        commands.append(
            LineCommand(
                left,
                data_y + ROW_HEIGHT,
                left + table_width,
                data_y + ROW_HEIGHT,
                SEPARATOR_COLOR,
            )
        )
        commands.extend(
            self._table_row(
                data_y,
                (
                    record.description,
                    format_quantity(record.quantity),
                    format_currency(record.unit_price, symbol),
                    format_currency(totals.line_total, symbol),
                ),
            )
        )
        return commands

    def _summary_block(
        self, record: InvoiceRecord, totals: DerivedTotals
    ) -> list[DrawCommand]:
        """Subtotal, tax and grand total rows; none of them is ever hidden."""
        left = self._settings.left_margin
        table_width = sum(COLUMN_WIDTHS)
        label_x = left + CELL_PADDING
        value_x = left + table_width - CELL_PADDING
        symbol = self._settings.currency_symbol
        y = TABLE_Y + 2 * ROW_HEIGHT + SUMMARY_GAP

        tax_label = f"{self._settings.tax_label} {format_rate(record.tax_rate)}%"
        shaded_rows = (
            (y, "Subtotal", totals.line_total),
            (y + SUMMARY_ROW_STEP, tax_label, totals.tax_amount),
        )

        commands: list[DrawCommand] = []
        for row_y, label, amount in shaded_rows:
            baseline = row_y + SUMMARY_BASELINE
            commands.extend(
                [
                    FilledRectCommand(left, row_y, table_width, SUMMARY_ROW_HEIGHT, SUMMARY_FILL),
                    TextCommand(label_x, baseline, label, size=BODY_SIZE, style=FontStyle.BOLD),
                    TextCommand(
                        value_x,
                        baseline,
                        format_currency(amount, symbol),
                        size=BODY_SIZE,
                        style=FontStyle.BOLD,
                        align=TextAlign.RIGHT,
                    ),
                ]
            )

        total_baseline = y + TOTAL_BASELINE
        commands.extend(
            [
                TextCommand(label_x, total_baseline, "Total", size=TOTAL_SIZE, style=FontStyle.BOLD),
                TextCommand(
                    value_x,
                    total_baseline,
                    format_currency(totals.grand_total, symbol),
                    size=TOTAL_SIZE,
                    style=FontStyle.BOLD,
                    align=TextAlign.RIGHT,
                ),
            ]
        )
        return commands
