"""Region directory for Affirm checkout"""

from typing import Optional

from ..models.address import Region

US_STATES = [
    ("AL", "Alabama"), ("AK", "Alaska"), ("AZ", "Arizona"), ("AR", "Arkansas"),
    ("CA", "California"), ("CO", "Colorado"), ("CT", "Connecticut"), ("DE", "Delaware"),
    ("DC", "District of Columbia"), ("FL", "Florida"), ("GA", "Georgia"), ("HI", "Hawaii"),
    ("ID", "Idaho"), ("IL", "Illinois"), ("IN", "Indiana"), ("IA", "Iowa"),
    ("KS", "Kansas"), ("KY", "Kentucky"), ("LA", "Louisiana"), ("ME", "Maine"),
    ("MD", "Maryland"), ("MA", "Massachusetts"), ("MI", "Michigan"), ("MN", "Minnesota"),
    ("MS", "Mississippi"), ("MO", "Missouri"), ("MT", "Montana"), ("NE", "Nebraska"),
    ("NV", "Nevada"), ("NH", "New Hampshire"), ("NJ", "New Jersey"), ("NM", "New Mexico"),
    ("NY", "New York"), ("NC", "North Carolina"), ("ND", "North Dakota"), ("OH", "Ohio"),
    ("OK", "Oklahoma"), ("OR", "Oregon"), ("PA", "Pennsylvania"), ("RI", "Rhode Island"),
    ("SC", "South Carolina"), ("SD", "South Dakota"), ("TN", "Tennessee"), ("TX", "Texas"),
    ("UT", "Utah"), ("VT", "Vermont"), ("VA", "Virginia"), ("WA", "Washington"),
    ("WV", "West Virginia"), ("WI", "Wisconsin"), ("WY", "Wyoming"),
]


class RegionDatabase:
    """In-memory state/province lookup"""

    def __init__(self, regions: Optional[list[Region]] = None):
        self.regions: dict[int, Region] = {}
        for region in regions or []:
            self.add_region(region)

    @classmethod
    def with_us_states(cls) -> "RegionDatabase":
        return cls([
            Region(id=index, abbr=abbr, name=name, country="US")
            for index, (abbr, name) in enumerate(US_STATES, start=1)
        ])

    def add_region(self, region: Region) -> Region:
        self.regions[region.id] = region
        return region

    def find_by_abbr(self, abbr: Optional[str]) -> Optional[Region]:
        """Get a region by abbreviation, case-insensitive"""
        if not abbr:
            return None
        abbr = abbr.strip().upper()
        return next((r for r in self.regions.values() if r.abbr.upper() == abbr), None)

    def find_by_name(self, name: Optional[str]) -> Optional[Region]:
        """Get a region by full name, case-insensitive"""
        if not name:
            return None
        name = name.strip().casefold()
        return next((r for r in self.regions.values() if r.name.casefold() == name), None)


# Singleton instance
region_db = RegionDatabase.with_us_states()
