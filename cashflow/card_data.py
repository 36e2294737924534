"""
Static card decks.

Card ids are unique across all four decks: ``sd-`` small deals, ``bd-`` big
deals, ``mk-`` market cards and ``dd-`` doodads.
"""

import random
from typing import List

from cashflow.cards import (
    AllPlayersExpense,
    BigDealCard,
    BusinessDeal,
    DeckState,
    DoodadCard,
    MarketCard,
    PropertyDamage,
    RealEstateDeal,
    RealEstateOffer,
    RealEstateOfferFlat,
    SmallDealCard,
    StockDeal,
    StockPriceChange,
    StockSplit,
)
from cashflow.player import RealEstateType

HOUSE = RealEstateType.HOUSE
CONDO = RealEstateType.CONDO
APARTMENT = RealEstateType.APARTMENT
DUPLEX = RealEstateType.DUPLEX
FOURPLEX = RealEstateType.FOURPLEX
EIGHTPLEX = RealEstateType.EIGHTPLEX
LAND = RealEstateType.LAND
COMMERCIAL = RealEstateType.COMMERCIAL

STOCK_SYMBOLS = ("ON2U", "MYT4U", "OK4U", "GRO4US")

STOCK_RULE = "Buy any number of shares at this price, or sell shares you own at this price."
PROPERTY_RULE = "Pay the down payment to buy. Cash flow is added to your passive income."
BUSINESS_RULE = "Pay the down payment to buy. Cash flow is added to your passive income."
SPLIT_RULE = "Everyone holding this stock is affected immediately."


def _stock(card_id: str, symbol: str, price: int, low: int, high: int, blurb: str) -> SmallDealCard:
    return SmallDealCard(
        card_id=card_id,
        title=f"Stock - {symbol}",
        deal=StockDeal(
            name=f"{symbol} Stock",
            symbol=symbol,
            cost_per_share=price,
            dividend_per_share=0,
            price_low=low,
            price_high=high,
            description=f"{blurb} Shares trade at ${price}.",
            rule=STOCK_RULE,
        ),
    )


def _split(card_id: str, symbol: str, ratio: float, blurb: str) -> SmallDealCard:
    title = f"{symbol} Stock Split" if ratio > 1 else f"{symbol} Reverse Split"
    return SmallDealCard(
        card_id=card_id,
        title=title,
        deal=StockSplit(name=title, symbol=symbol, split_ratio=ratio, description=blurb, rule=SPLIT_RULE),
    )


def _property(card_cls, card_id, title, property_type, cost, mortgage, down, cash_flow, blurb):
    return card_cls(
        card_id=card_id,
        title=title,
        deal=RealEstateDeal(
            name=title,
            property_type=property_type,
            cost=cost,
            mortgage=mortgage,
            down_payment=down,
            cash_flow=cash_flow,
            description=blurb,
            rule=PROPERTY_RULE,
        ),
    )


def _business(card_id, title, cost, mortgage, down, cash_flow, blurb) -> BigDealCard:
    return BigDealCard(
        card_id=card_id,
        title=title,
        deal=BusinessDeal(
            name=title,
            cost=cost,
            mortgage=mortgage,
            down_payment=down,
            cash_flow=cash_flow,
            description=blurb,
            rule=BUSINESS_RULE,
        ),
    )


SMALL_DEAL_CARDS: List[SmallDealCard] = [
    _stock("sd-1", "ON2U", 1, 1, 30, "Pharmaceutical start-up misses its earnings forecast."),
    _stock("sd-2", "ON2U", 5, 1, 30, "Drug maker awaits regulatory review."),
    _stock("sd-3", "ON2U", 10, 1, 30, "Steady trading on light volume."),
    _stock("sd-4", "ON2U", 20, 1, 30, "New product line announced."),
    _stock("sd-5", "MYT4U", 1, 1, 30, "Electronics retailer rumored to be near bankruptcy."),
    _stock("sd-6", "MYT4U", 5, 1, 30, "Sales are flat for the third quarter in a row."),
    _stock("sd-7", "MYT4U", 10, 1, 30, "Analysts are split on the retailer's outlook."),
    _stock("sd-8", "MYT4U", 30, 1, 30, "Holiday sales beat every estimate."),
    _stock("sd-9", "OK4U", 5, 5, 40, "Drug company loses a patent lawsuit."),
    _stock("sd-10", "OK4U", 10, 5, 40, "Cold medicine sales are down."),
    _stock("sd-11", "OK4U", 20, 5, 40, "Strong flu season boosts demand."),
    _stock("sd-12", "GRO4US", 5, 5, 50, "Growth fund sheds its tech holdings."),
    _stock("sd-13", "GRO4US", 10, 5, 50, "Fund manager replaced after a bad year."),
    _stock("sd-14", "GRO4US", 40, 5, 50, "Fund posts its best year on record."),
    _split("sd-15", "OK4U", 2, "OK4U splits 2 for 1. Every shareholder doubles their shares."),
    _split("sd-16", "GRO4US", 0.5, "GRO4US reverse splits 1 for 2. Every shareholder halves their shares."),
    _property(SmallDealCard, "sd-17", "House for Sale - 3Br/2Ba", HOUSE, 50000, 45000, 5000, 100,
              "Owner moving out of state. Quick sale needed."),
    _property(SmallDealCard, "sd-18", "House for Sale - 3Br/2Ba", HOUSE, 65000, 60000, 5000, 160,
              "Bank foreclosure in a good school district."),
    _property(SmallDealCard, "sd-19", "House for Sale - 2Br/1Ba", HOUSE, 40000, 36000, 4000, 140,
              "Older home on a quiet street, already rented."),
    _property(SmallDealCard, "sd-20", "House for Sale - 3Br/2Ba", HOUSE, 75000, 68000, 7000, 180,
              "Retiring landlord sells a well-kept rental."),
    _property(SmallDealCard, "sd-21", "Condo for Sale - 2Br/1Ba", CONDO, 40000, 37000, 3000, 120,
              "Parents selling their son's condo after graduation."),
    _property(SmallDealCard, "sd-22", "Condo for Sale - 2Br/1Ba", CONDO, 45000, 40000, 5000, 140,
              "Condo near the university, long-term tenant in place."),
    _property(SmallDealCard, "sd-23", "Condo for Sale - 1Br/1Ba", CONDO, 30000, 28000, 2000, 80,
              "Small downtown unit, divorce sale."),
    _property(SmallDealCard, "sd-24", "Condo for Sale - 2Br/2Ba", CONDO, 55000, 50000, 5000, 200,
              "Lakeside condo with a waiting list of renters."),
    _property(SmallDealCard, "sd-25", "Land - 10 Acres", LAND, 5000, 0, 5000, 0,
              "Raw land at the edge of town. No income."),
    _property(SmallDealCard, "sd-26", "Land - 20 Acres", LAND, 20000, 0, 20000, 0,
              "Farm land zoned for future development."),
    _property(SmallDealCard, "sd-27", "House for Sale - 2Br/1Ba", HOUSE, 35000, 32000, 3000, 60,
              "Fixer-upper sold as-is by an estate."),
    _property(SmallDealCard, "sd-28", "Condo for Sale - 3Br/2Ba", CONDO, 60000, 54000, 6000, 220,
              "Builder closing out the last units in a new complex."),
    _stock("sd-29", "ON2U", 30, 1, 30, "Breakthrough vaccine drives the price to a record."),
    _stock("sd-30", "MYT4U", 20, 1, 30, "Retailer opens fifty new stores."),
]

BIG_DEAL_CARDS: List[BigDealCard] = [
    _property(BigDealCard, "bd-1", "Apartment House for Sale - 12 Units", APARTMENT, 350000, 300000, 50000,
              2400, "Apartment complex in a growing suburb."),
    _property(BigDealCard, "bd-2", "Apartment House for Sale - 24 Units", APARTMENT, 575000, 500000, 75000,
              3400, "Large complex sold by a retiring investor."),
    _property(BigDealCard, "bd-3", "Apartment House for Sale - 60 Units", APARTMENT, 1200000, 1050000, 150000,
              9000, "Institutional seller exiting the market."),
    _property(BigDealCard, "bd-4", "Duplex for Sale", DUPLEX, 80000, 72000, 8000, 240,
              "Side-by-side duplex, both units rented."),
    _property(BigDealCard, "bd-5", "Duplex for Sale", DUPLEX, 90000, 80000, 10000, 300,
              "Duplex near the hospital with reliable tenants."),
    _property(BigDealCard, "bd-6", "4-Plex for Sale", FOURPLEX, 120000, 108000, 12000, 600,
              "Well maintained fourplex, all units occupied."),
    _property(BigDealCard, "bd-7", "4-Plex for Sale", FOURPLEX, 140000, 124000, 16000, 800,
              "Owner relocating and needs to sell fast."),
    _property(BigDealCard, "bd-8", "4-Plex for Sale", FOURPLEX, 100000, 92000, 8000, -200,
              "Fixer-upper fourplex with half the units empty."),
    _property(BigDealCard, "bd-9", "8-Plex for Sale", EIGHTPLEX, 240000, 208000, 32000, 1700,
              "Eight-unit building in a stable neighborhood."),
    _property(BigDealCard, "bd-10", "8-Plex for Sale", EIGHTPLEX, 220000, 180000, 40000, 1500,
              "Partnership dissolving, must sell."),
    _property(BigDealCard, "bd-11", "Commercial Building", COMMERCIAL, 400000, 340000, 60000, 2800,
              "Office building leased to a national tenant."),
    _property(BigDealCard, "bd-12", "Strip Mall", COMMERCIAL, 600000, 500000, 100000, 4000,
              "Six-store strip mall on a busy road."),
    _property(BigDealCard, "bd-13", "Warehouse", COMMERCIAL, 300000, 260000, 40000, 2000,
              "Warehouse with a long-term lease to a distributor."),
    _property(BigDealCard, "bd-14", "House for Sale - 4Br/3Ba", HOUSE, 150000, 130000, 20000, 500,
              "Large family home leased to a corporate tenant."),
    _property(BigDealCard, "bd-15", "Apartment House for Sale - 8 Units", APARTMENT, 200000, 170000, 30000,
              1400, "Small apartment building near downtown."),
    _property(BigDealCard, "bd-16", "Duplex for Sale", DUPLEX, 70000, 64000, 6000, 200,
              "Up-and-down duplex in an older neighborhood."),
    _business("bd-17", "Car Wash", 125000, 100000, 25000, 1800,
              "Automatic car wash for sale by its founder."),
    _business("bd-18", "Pizza Franchise", 500000, 400000, 100000, 5000,
              "Established pizza franchise with three locations."),
    _business("bd-19", "Laundromat", 150000, 120000, 30000, 1200,
              "Busy laundromat near student housing."),
    _business("bd-20", "Auto Parts Store", 200000, 170000, 30000, 1500,
              "Family-owned parts store, owner retiring."),
    _business("bd-21", "Self-Storage Facility", 350000, 300000, 50000, 2500,
              "Storage units at ninety percent occupancy."),
    _business("bd-22", "Bed and Breakfast", 400000, 350000, 50000, 2000,
              "Eight-room inn in a tourist town."),
    _business("bd-23", "Vending Machine Route", 40000, 30000, 10000, 600,
              "Forty machines in office buildings."),
    _business("bd-24", "Dry Cleaner", 180000, 150000, 30000, 1400,
              "Dry cleaner with a loyal customer base."),
]


def _price_change(card_id, title, description, symbol, price) -> MarketCard:
    if price:
        summary = f"{symbol} stock moves to ${price}/share."
    else:
        summary = f"{symbol} stock drops to $0. All shares are worthless."
    return MarketCard(card_id, title, description, StockPriceChange(symbol=symbol, new_price=price, description=summary))


MARKET_CARDS: List[MarketCard] = [
    _price_change("mk-1", "ON2U Skyrockets!", "ON2U receives approval for a new drug. Stock soars to $20 per share!",
                  "ON2U", 20),
    _price_change("mk-2", "MYT4U Crashes!", "MYT4U caught in an accounting scandal. Stock drops to $0!",
                  "MYT4U", 0),
    _price_change("mk-3", "OK4U Surges", "OK4U announces a blockbuster drug. Stock jumps to $40 per share!",
                  "OK4U", 40),
    _price_change("mk-4", "GRO4US Rises", "GRO4US reports record quarterly earnings. Stock reaches $50 per share.",
                  "GRO4US", 50),
    _price_change("mk-5", "ON2U Bankrupt!", "ON2U fails a clinical trial and files for bankruptcy. Stock goes to $0.",
                  "ON2U", 0),
    _price_change("mk-6", "MYT4U Buyout Rumor", "A competitor is said to be circling MYT4U. Stock jumps to $15.",
                  "MYT4U", 15),
    _price_change("mk-7", "OK4U Product Recall", "OK4U issues a massive product recall. Stock drops to $1 per share.",
                  "OK4U", 1),
    _price_change("mk-8", "GRO4US Expansion News", "GRO4US opens funds overseas. Stock climbs to $35 per share.",
                  "GRO4US", 35),
    _price_change("mk-9", "ON2U Contract Win", "ON2U wins a government supply contract. Stock rises to $55.",
                  "ON2U", 55),
    _price_change("mk-10", "MYT4U Goes Viral!", "A MYT4U gadget is the hit of the season. Stock reaches $30.",
                  "MYT4U", 30),
    MarketCard("mk-11", "Housing Boom!",
               "Hot housing market! Buyer will pay 2x the original cost for any house you own.",
               RealEstateOffer((HOUSE,), 2, "Sell any house for 2x its original cost.")),
    MarketCard("mk-12", "Condo Market Heats Up",
               "Investor wants to buy condos. Offering 1.5x original cost for any condo.",
               RealEstateOffer((CONDO,), 1.5, "Sell any condo for 1.5x its original cost.")),
    MarketCard("mk-13", "Apartment Complex Buyer",
               "REIT is buying apartment complexes. Offering 1.8x original cost.",
               RealEstateOffer((APARTMENT, EIGHTPLEX, FOURPLEX), 1.8,
                               "Sell any apartment, 8-plex, or 4-plex for 1.8x its original cost.")),
    MarketCard("mk-14", "Commercial Real Estate Boom",
               "Foreign investor buying commercial properties. Paying 2x original cost.",
               RealEstateOffer((COMMERCIAL,), 2, "Sell any commercial property for 2x its original cost.")),
    MarketCard("mk-15", "Land Developer Offer",
               "Developer wants land for a shopping center. Offering $250,000 for any parcel.",
               RealEstateOfferFlat((LAND,), 250000, "Sell any land for $250,000.")),
    MarketCard("mk-16", "Duplex Buyer",
               "Investor looking for duplexes. Offering 1.5x original cost for any duplex.",
               RealEstateOffer((DUPLEX,), 1.5, "Sell any duplex for 1.5x its original cost.")),
    MarketCard("mk-17", "Tornado Damage!",
               "A tornado tears through town. Owners of houses and duplexes pay for repairs.",
               PropertyDamage((HOUSE, DUPLEX), 5000, "Pay $5,000 if you own a house or duplex.")),
    MarketCard("mk-18", "Roof Damage - Apartments",
               "Storm damages roofs on multi-unit buildings.",
               PropertyDamage((APARTMENT, EIGHTPLEX, FOURPLEX), 10000,
                              "Pay $10,000 if you own an apartment, 8-plex, or 4-plex.")),
    MarketCard("mk-19", "Tax Increase", "The county raises property taxes for everyone.",
               AllPlayersExpense(500, "Every player pays $500.")),
    MarketCard("mk-20", "Insurance Premium Hike", "Insurers raise premiums across the board.",
               AllPlayersExpense(1000, "Every player pays $1,000.")),
    MarketCard("mk-21", "Utility Rate Increase", "The utility company raises its rates.",
               AllPlayersExpense(300, "Every player pays $300.")),
    _price_change("mk-22", "GRO4US Dips", "GRO4US underperforms the market. Stock falls to $15 per share.",
                  "GRO4US", 15),
    MarketCard("mk-23", "Plumbing Emergency", "Pipes burst in condo buildings across town.",
               PropertyDamage((CONDO,), 3000, "Pay $3,000 if you own a condo.")),
    MarketCard("mk-24", "House Buyer Frenzy",
               "Relocating executives need homes now. Offering $100,000 for any house.",
               RealEstateOfferFlat((HOUSE,), 100000, "Sell any house for $100,000.")),
    _price_change("mk-25", "OK4U Health Scare", "OK4U's best seller is pulled from shelves. Stock drops to $5.",
                  "OK4U", 5),
]

DOODAD_CARDS: List[DoodadCard] = [
    DoodadCard("dd-1", "New Big Screen TV", "You can't resist the sale. Pay $1,500.", 1500),
    DoodadCard("dd-2", "Dinner Out", "Celebrate with friends at a fancy restaurant. Pay $200.", 200),
    DoodadCard("dd-3", "New Golf Clubs", "Your old clubs just weren't cutting it. Pay $300.", 300),
    DoodadCard("dd-4", "Family Vacation", "A week at the beach with the family. Pay $2,000.", 2000),
    DoodadCard("dd-5", "Car Repair", "Transmission trouble. Pay $700.", 700),
    DoodadCard("dd-6", "New Phone", "The latest model came out. Pay $400.", 400),
    DoodadCard("dd-7", "Birthday Party", "Throw a party for your best friend. Pay $250.", 250),
    DoodadCard("dd-8", "Boat", "Buy a small fishing boat. Pay $3,000.", 3000),
    DoodadCard("dd-9", "Concert Tickets", "Front row seats to your favorite band. Pay $350.", 350),
    DoodadCard("dd-10", "New Furniture", "Replace the living room set. Pay $1,200.", 1200),
    DoodadCard("dd-11", "Dentist Bill", "Two crowns and a cleaning. Pay $500.", 500),
    DoodadCard("dd-12", "Gym Membership", "Pay for a year up front. Pay $600.", 600),
    DoodadCard("dd-13", "Wedding Gift", "Your cousin is getting married. Pay $250.", 250),
    DoodadCard("dd-14", "New Laptop", "Your old one finally died. Pay $1,000.", 1000),
    DoodadCard("dd-15", "Weekend Getaway", "A spa weekend to recharge. Pay $800.", 800),
    DoodadCard("dd-16", "Home Repairs", "The water heater broke. Pay $900.", 900),
    DoodadCard("dd-17", "Designer Shoes", "They were on sale. Pay $300.", 300),
    DoodadCard("dd-18", "Hot Tub", "Install a backyard hot tub. Pay $2,500.", 2500),
    DoodadCard("dd-19", "Coffee Machine", "Espresso at home every morning. Pay $200.", 200),
    DoodadCard("dd-20", "Video Game Console", "The kids begged. Pay $450.", 450),
    DoodadCard("dd-21", "Jewelry", "An anniversary gift. Pay $1,800.", 1800),
    DoodadCard("dd-22", "Traffic Ticket", "Speeding on the highway. Pay $250.", 250),
    DoodadCard("dd-23", "Season Tickets", "Football season tickets. Pay $1,100.", 1100),
    DoodadCard("dd-24", "New Camera", "For the hobby you will definitely keep up. Pay $650.", 650),
    DoodadCard("dd-25", "Tax Audit", "The IRS finds a mistake. Pay 10% of your total income.", 10,
               is_percent_of_income=True),
]


def create_decks(rng: random.Random) -> DeckState:
    """Shuffle fresh copies of every deck."""

    def shuffled(cards):
        pile = list(cards)
        rng.shuffle(pile)
        return tuple(pile)

    return DeckState(
        small_deal_deck=shuffled(SMALL_DEAL_CARDS),
        big_deal_deck=shuffled(BIG_DEAL_CARDS),
        market_deck=shuffled(MARKET_CARDS),
        doodad_deck=shuffled(DOODAD_CARDS),
    )
